"""Pydantic models shared between FastAPI routers and services."""
from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# A query result as the caller sent it: raw text or already-parsed JSON.
QueryResult = Union[str, Dict[str, Any], List[Any], bool, int, float, None]


class GenerateQueryRequest(BaseModel):
    index: str = Field(..., min_length=1)
    question: str = Field(..., min_length=1)


class SummarizeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    index: str = Field(..., min_length=1)
    question: str = Field(..., min_length=1)
    query: Optional[str] = None
    response: QueryResult = Field(...)
    is_error: bool = Field(..., alias="isError")

    def serialized_response(self) -> str:
        """JSON-encode ``response`` the same way whatever its shape.

        Strings are encoded too, so the agent always receives a JSON document.
        """
        return json.dumps(self.response, ensure_ascii=False, separators=(",", ":"))


class SummarizeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    summary: str
    suggested_questions: List[str] = Field(default_factory=list, alias="suggestedQuestions")


class ModelOutput(BaseModel):
    name: str
    result: Optional[str] = None


class InferenceResult(BaseModel):
    output: List[ModelOutput] = Field(default_factory=list)


class AgentExecutionResponse(BaseModel):
    inference_results: List[InferenceResult] = Field(default_factory=list)

    def result_at(self, position: int) -> Optional[str]:
        """Return ``inference_results[0].output[position].result`` if present."""
        if not self.inference_results:
            return None
        outputs = self.inference_results[0].output
        if position >= len(outputs):
            return None
        return outputs[position].result


class GeneratedPPL(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ppl: str
    execution_result: Optional[str] = Field(None, alias="executionResult")


class ErrorBody(BaseModel):
    statusCode: int
    body: str
