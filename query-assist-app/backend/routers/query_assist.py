"""Endpoints for PPL generation and query result summaries."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from ..config import GENERATE_PPL_PATH, SUMMARIZE_PATH, QueryAssistConfig, get_config
from ..models.schemas import ErrorBody, GenerateQueryRequest, SummarizeRequest
from ..services import query_assist
from ..services.opensearch_client import OpenSearchClient

logger = logging.getLogger(__name__)

router = APIRouter(tags=["query_assist"])

PPL_AGENT_MISSING = "PPL agent not found in configuration. Expected QUERY_ASSIST_PPL_AGENT_ID"
SUMMARY_AGENT_MISSING = (
    "Summary agent not found in configuration. Expected QUERY_ASSIST_RESPONSE_SUMMARY_AGENT_ID "
    "and QUERY_ASSIST_ERROR_SUMMARY_AGENT_ID"
)


def get_opensearch_client(request: Request) -> OpenSearchClient:
    return request.app.state.opensearch


def error_response(status_code: int, message: str) -> JSONResponse:
    body = ErrorBody(statusCode=status_code, body=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def _from_exception(exc: Exception) -> JSONResponse:
    status_code = getattr(exc, "status_code", None) or 500
    return error_response(status_code, str(exc))


@router.post(GENERATE_PPL_PATH, response_class=PlainTextResponse)
async def generate_ppl(
    payload: GenerateQueryRequest,
    config: QueryAssistConfig = Depends(get_config),
    client: OpenSearchClient = Depends(get_opensearch_client),
) -> Response:
    if not config.ppl_agent_id:
        return error_response(400, PPL_AGENT_MISSING)

    try:
        ppl = await query_assist.generate_ppl(client, config.ppl_agent_id, payload.index, payload.question)
    except Exception as exc:
        logger.exception("PPL generation failed for index %s", payload.index)
        return _from_exception(exc)
    return PlainTextResponse(ppl)


@router.post(SUMMARIZE_PATH)
async def summarize(
    payload: SummarizeRequest,
    config: QueryAssistConfig = Depends(get_config),
    client: OpenSearchClient = Depends(get_opensearch_client),
) -> Response:
    if not config.response_summary_agent_id or not config.error_summary_agent_id:
        return error_response(400, SUMMARY_AGENT_MISSING)

    try:
        result = await query_assist.summarize(
            client,
            config.response_summary_agent_id,
            config.error_summary_agent_id,
            payload,
        )
    except Exception as exc:
        logger.exception("Summary failed for index %s", payload.index)
        return _from_exception(exc)
    return JSONResponse(content=result.model_dump(by_alias=True))
