"""Streamlit front-end for the Query Assist API."""
from __future__ import annotations

import json
import os
from typing import Any, Dict

import httpx
import streamlit as st
from dotenv import load_dotenv

from backend.config import GENERATE_PPL_PATH, SUMMARIZE_PATH

load_dotenv()

BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:8000")

st.set_page_config(page_title="Query Assist", layout="wide", page_icon="🔎")

st.title("🔎 Query Assist")
st.caption("Ask a question about an index, get a PPL query, then let the agents explain the result.")


def _raise_for_error(response: httpx.Response) -> None:
    if response.status_code < 400:
        return
    try:
        message = response.json().get("body", response.text)
    except ValueError:
        message = response.text
    raise RuntimeError(f"HTTP {response.status_code}: {message}")


def _api_post(path: str, payload: Dict[str, Any]) -> httpx.Response:
    response = st.session_state.http_client.post(f"{BACKEND_URL}{path}", json=payload)
    _raise_for_error(response)
    return response


def _init_http_client() -> None:
    if "http_client" not in st.session_state:
        # agents may take up to five minutes to answer
        st.session_state.http_client = httpx.Client(timeout=330.0)


_init_http_client()

with st.sidebar:
    st.header("Index")
    index = st.text_input("Index name", key="index")

question = st.text_input("Question", key="question")

if st.button("Generate PPL", disabled=not (index and question)):
    with st.spinner("Generating PPL..."):
        try:
            response = _api_post(GENERATE_PPL_PATH, {"index": index, "question": question})
            st.session_state["ppl"] = response.text
        except Exception as exc:  # pragma: no cover - network issues
            st.error(f"PPL generation failed: {exc}")

ppl = st.session_state.get("ppl")
if ppl:
    st.subheader("Generated query")
    st.code(ppl)

st.markdown("---")
st.subheader("Summarize a result")
raw_result = st.text_area("Query result or error (JSON or plain text)", height=200)
is_error = st.checkbox("The query failed")

if st.button("Summarize", disabled=not (index and question and raw_result)):
    try:
        result_value: Any = json.loads(raw_result)
    except ValueError:
        result_value = raw_result
    payload = {
        "index": index,
        "question": question,
        "query": ppl or None,
        "response": result_value,
        "isError": is_error,
    }
    with st.spinner("Summarizing..."):
        try:
            st.session_state["summary"] = _api_post(SUMMARIZE_PATH, payload).json()
        except Exception as exc:  # pragma: no cover - network issues
            st.error(f"Summary failed: {exc}")

summary = st.session_state.get("summary")
if summary:
    st.write(summary["summary"])
    if summary["suggestedQuestions"]:
        st.markdown("**Suggested questions**")
        for item in summary["suggestedQuestions"]:
            st.markdown(f"- {item}")
