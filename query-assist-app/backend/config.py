"""Runtime configuration read from the environment (and ``.env``)."""
from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

ML_COMMONS_API_PREFIX = "/_plugins/_ml"
GENERATE_PPL_PATH = "/api/observability/query_assist/generate_ppl"
SUMMARIZE_PATH = "/api/observability/query_assist/summarize"


class QueryAssistConfig(BaseModel):
    opensearch_url: str = "http://localhost:9200"
    opensearch_username: Optional[str] = None
    opensearch_password: Optional[str] = None
    verify_certs: bool = True
    ppl_agent_id: Optional[str] = None
    response_summary_agent_id: Optional[str] = None
    error_summary_agent_id: Optional[str] = None


def _env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


@lru_cache(maxsize=1)
def get_config() -> QueryAssistConfig:
    return QueryAssistConfig(
        opensearch_url=os.getenv("OPENSEARCH_URL", "http://localhost:9200"),
        opensearch_username=_env("OPENSEARCH_USERNAME"),
        opensearch_password=_env("OPENSEARCH_PASSWORD"),
        verify_certs=os.getenv("OPENSEARCH_VERIFY_CERTS", "true").lower() not in {"0", "false", "no"},
        ppl_agent_id=_env("QUERY_ASSIST_PPL_AGENT_ID"),
        response_summary_agent_id=_env("QUERY_ASSIST_RESPONSE_SUMMARY_AGENT_ID"),
        error_summary_agent_id=_env("QUERY_ASSIST_ERROR_SUMMARY_AGENT_ID"),
    )
