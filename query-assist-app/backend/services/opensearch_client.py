"""Async client for the OpenSearch endpoints used by query assist."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from ..config import ML_COMMONS_API_PREFIX, QueryAssistConfig
from ..models.schemas import AgentExecutionResponse

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class AgentRequestOptions:
    request_timeout: float
    max_retries: int


# Agents take a long time to produce a final answer, and are never retried.
AGENT_REQUEST_OPTIONS = AgentRequestOptions(request_timeout=5 * 60.0, max_retries=0)


class OpenSearchError(RuntimeError):
    """Raised when OpenSearch cannot be reached or answers with an error."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text or f"OpenSearch returned HTTP {response.status_code}"
    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict) and error.get("reason"):
        return str(error["reason"])
    if isinstance(error, str):
        return error
    return response.text


class OpenSearchClient:
    """Thin wrapper over ``httpx.AsyncClient``.

    ``options`` fixes the timeout and retry policy of agent executions; the
    transport is built with ``options.max_retries`` connection retries.
    """

    def __init__(
        self,
        config: QueryAssistConfig,
        options: AgentRequestOptions = AGENT_REQUEST_OPTIONS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.options = options
        auth = None
        if config.opensearch_username:
            auth = httpx.BasicAuth(config.opensearch_username, config.opensearch_password or "")
        self._client = httpx.AsyncClient(
            base_url=config.opensearch_url,
            auth=auth,
            timeout=httpx.Timeout(DEFAULT_TIMEOUT),
            transport=transport
            or httpx.AsyncHTTPTransport(retries=options.max_retries, verify=config.verify_certs),
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        logger.debug("OpenSearch request %s %s", method, path)
        kwargs: Dict[str, Any] = {}
        if timeout is not None:
            kwargs["timeout"] = httpx.Timeout(timeout)
        try:
            response = await self._client.request(method, path, json=json, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("OpenSearch request %s %s failed: %s", method, path, exc)
            raise OpenSearchError(str(exc) or exc.__class__.__name__) from exc
        if response.status_code >= 400:
            message = _error_message(response)
            logger.warning("OpenSearch %s %s -> %s: %s", method, path, response.status_code, message)
            raise OpenSearchError(message, status_code=response.status_code)
        return response.json()

    async def execute_agent(
        self,
        agent_id: str,
        parameters: Dict[str, Any],
        options: Optional[AgentRequestOptions] = None,
    ) -> AgentExecutionResponse:
        options = options or self.options
        data = await self._request(
            "POST",
            f"{ML_COMMONS_API_PREFIX}/agents/{agent_id}/_execute",
            json={"parameters": parameters},
            timeout=options.request_timeout,
        )
        return AgentExecutionResponse.model_validate(data)

    async def get_mapping(self, index: str) -> Dict[str, Any]:
        return await self._request("GET", f"/{quote(index, safe=',*')}/_mapping")

    async def search(self, index: str, size: int = 1) -> Dict[str, Any]:
        return await self._request("POST", f"/{quote(index, safe=',*')}/_search", json={"size": size})
