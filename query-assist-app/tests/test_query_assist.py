from __future__ import annotations

from backend.models.schemas import AgentExecutionResponse, GeneratedPPL, SummarizeRequest
from backend.services.query_assist import clean_ppl, extract_suggested_questions


def test_clean_ppl_applies_all_fixups():
    raw = "source \r\n with SPAN(x) and `ticks` and ISNOTNULL(y)"
    # each line break character becomes a space
    assert clean_ppl(raw) == "source    with span(x) and ticks and isnotnull(y)"


def test_clean_ppl_trims_and_matches_isnotnull_in_any_case():
    assert clean_ppl("\n  where IsNotNull(a) \r\n") == "where isnotnull(a)"


def test_clean_ppl_only_rewrites_uppercase_span_at_word_boundary():
    assert clean_ppl("stats count() by TIMESPAN(a) SPAN(b) Span(c)") == "stats count() by TIMESPAN(a) span(b) Span(c)"


def test_extract_suggested_questions_in_order():
    text = "<question>A?</question> junk <question>B?</question>"
    assert extract_suggested_questions(text) == ["A?", "B?"]


def test_extract_suggested_questions_spans_lines():
    text = "intro\n<question>How many\r\nerrors?</question>\n"
    assert extract_suggested_questions(text) == ["How many\r\nerrors?"]


def test_extract_suggested_questions_without_matches():
    assert extract_suggested_questions("") == []
    assert extract_suggested_questions("no tags here") == []
    assert extract_suggested_questions("<question>never closed") == []


def test_extract_suggested_questions_empty_pair_runs_to_next_close():
    text = "<question></question>x</question>"
    assert extract_suggested_questions(text) == ["</question>x"]


def test_result_at_handles_missing_outputs():
    envelope = AgentExecutionResponse.model_validate(
        {"inference_results": [{"output": [{"name": "response", "result": "done"}, {"name": "questions"}]}]}
    )
    assert envelope.result_at(0) == "done"
    assert envelope.result_at(1) is None
    assert envelope.result_at(2) is None
    assert AgentExecutionResponse.model_validate({"inference_results": []}).result_at(0) is None


def test_serialized_response_encodes_every_shape():
    def request(value):
        return SummarizeRequest(index="logs", question="q", response=value, isError=False)

    assert request("plain text").serialized_response() == '"plain text"'
    assert request({"total": 2, "rows": [1, 2]}).serialized_response() == '{"total":2,"rows":[1,2]}'
    assert request(None).serialized_response() == "null"
    assert request("é").serialized_response() == '"é"'


def test_generated_ppl_reads_execution_result_alias():
    generated = GeneratedPPL.model_validate({"ppl": "source=logs", "executionResult": "{}"})
    assert generated.ppl == "source=logs"
    assert generated.execution_result == "{}"
