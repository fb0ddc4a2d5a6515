"""Compatibility package for ``uvicorn backend.main``.

This shim exposes the FastAPI backend package located under
``query-assist-app/backend`` so that importing ``backend`` from the
repository root works without adjusting ``PYTHONPATH``.
"""
from __future__ import annotations

from pathlib import Path

_BACKEND_DIR = Path(__file__).resolve().parent.parent / "query-assist-app" / "backend"
if not _BACKEND_DIR.exists():  # pragma: no cover
    raise ImportError(f"Expected backend sources at {_BACKEND_DIR}")

__path__ = [str(_BACKEND_DIR)]
