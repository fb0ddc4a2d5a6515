"""PPL generation and result summarization through ML Commons agents."""
from __future__ import annotations

import asyncio
import json
import logging
import re
from typing import Any, Dict, List

from pydantic import ValidationError

from ..models.schemas import AgentExecutionResponse, GeneratedPPL, SummarizeRequest, SummarizeResponse
from .field_context import generate_field_context
from .opensearch_client import OpenSearchClient

logger = logging.getLogger(__name__)

QUESTION_OPEN = "<question>"
QUESTION_CLOSE = "</question>"

LINE_BREAK_PATTERN = re.compile(r"[\r\n]")
# Rewrites for known PPL grammar incompatibilities, applied in order.
PPL_FIXUPS = [
    (re.compile(r"ISNOTNULL", re.IGNORECASE), "isnotnull"),
    (re.compile(r"`"), ""),
    (re.compile(r"\bSPAN\("), "span("),
]


class QueryAssistError(RuntimeError):
    """Raised when an agent answer is missing the expected output."""


def clean_ppl(ppl: str) -> str:
    cleaned = LINE_BREAK_PATTERN.sub(" ", ppl).strip()
    for pattern, replacement in PPL_FIXUPS:
        cleaned = pattern.sub(replacement, cleaned)
    return cleaned


def extract_suggested_questions(text: str) -> List[str]:
    """Return the inner text of each ``<question>...</question>`` pair.

    Content may span lines but must be at least one character long, so an
    empty pair swallows its closing tag and runs to the next one.
    """

    questions: List[str] = []
    position = 0
    while True:
        start = text.find(QUESTION_OPEN, position)
        if start == -1:
            break
        content_start = start + len(QUESTION_OPEN)
        end = text.find(QUESTION_CLOSE, content_start + 1)
        if end == -1:
            break
        questions.append(text[content_start:end])
        position = end + len(QUESTION_CLOSE)
    return questions


def _parse_generated_ppl(raw: str) -> GeneratedPPL:
    try:
        return GeneratedPPL.model_validate(json.loads(raw))
    except (ValueError, ValidationError) as exc:
        raise QueryAssistError(f"Unexpected PPL agent output: {raw}") from exc


async def generate_ppl(client: OpenSearchClient, agent_id: str, index: str, question: str) -> str:
    response = await client.execute_agent(agent_id, {"index": index, "question": question})
    raw = response.result_at(0)
    if not raw:
        raise QueryAssistError("Generated PPL query not found.")
    # executionResult is not used by callers
    generated = _parse_generated_ppl(raw)
    ppl = clean_ppl(generated.ppl)
    logger.info("Generated PPL for index %s", index)
    return ppl


async def summarize(
    client: OpenSearchClient,
    response_summary_agent_id: str,
    error_summary_agent_id: str,
    request: SummarizeRequest,
) -> SummarizeResponse:
    parameters: Dict[str, Any] = {
        "index": request.index,
        "question": request.question,
        "response": request.serialized_response(),
    }
    if request.query is not None:
        parameters["query"] = request.query

    response: AgentExecutionResponse
    if not request.is_error:
        response = await client.execute_agent(response_summary_agent_id, parameters)
    else:
        mappings, sample_doc = await asyncio.gather(
            client.get_mapping(request.index),
            client.search(request.index, size=1),
        )
        parameters["fields"] = generate_field_context(mappings, sample_doc)
        response = await client.execute_agent(error_summary_agent_id, parameters)

    summary = response.result_at(0)
    if not summary:
        raise QueryAssistError("Generated summary not found.")
    suggested = extract_suggested_questions(response.result_at(1) or "")
    return SummarizeResponse(summary=summary, suggested_questions=suggested)
