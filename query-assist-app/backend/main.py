"""FastAPI application entrypoint."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from .config import get_config
from .routers import query_assist
from .services.opensearch_client import OpenSearchClient

LOG_DIR = Path("logs")
LOG_DIR.mkdir(parents=True, exist_ok=True)

handler = RotatingFileHandler(LOG_DIR / "app.log", maxBytes=5_000_000, backupCount=3)
logging.basicConfig(level=logging.INFO, handlers=[handler])
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = get_config()
    app.state.opensearch = OpenSearchClient(config)
    logger.info("OpenSearch client ready for %s", config.opensearch_url)
    try:
        yield
    finally:
        await app.state.opensearch.aclose()


app = FastAPI(title="Query Assist API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(query_assist.router)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = "; ".join(
        f"[{'.'.join(str(part) for part in error['loc'])}]: {error['msg']}" for error in exc.errors()
    )
    logger.info("Rejected request to %s: %s", request.url.path, errors)
    return query_assist.error_response(400, errors)


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
