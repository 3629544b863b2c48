"""Shared index access and error rendering for section tools."""

from __future__ import annotations

from typing import Any

from refindex.config import get_index_config
from refindex.contracts import build_error
from refindex.errors import EncodingError, ParseError
from refindex.knowledge import DocumentLoader, QueryService


def get_query_service() -> QueryService:
    """Return a query service for the configured document (cached per path)."""
    return DocumentLoader.load_service(get_index_config().source)


def build_load_error(exc: Exception) -> dict[str, Any]:
    """Build an error envelope for a document that cannot be indexed."""
    source = str(get_index_config().source)
    if isinstance(exc, ParseError):
        details: dict[str, Any] = {"source": source, "reason": exc.message}
        if exc.line is not None:
            details["line"] = exc.line
        if isinstance(exc, EncodingError):
            details["action"] = "save the document as UTF-8"
            return build_error("encoding_error", "Reference document is not valid UTF-8", details)
        return build_error("parse_error", "Reference document is malformed", details)
    return build_error(
        "source_unavailable",
        "Reference document could not be read",
        {"source": source, "reason": str(exc), "action": "set REFINDEX_SOURCE to a readable file"},
    )
