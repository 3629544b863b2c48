"""Response envelopes for the section tools.

Every tool answers with ``{ok, data, error}``. Successful answers carry a
``SectionsData`` payload; failures carry one of the ``ErrorCode`` values so
clients can branch on the code instead of the message text.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

ErrorCode = Literal[
    "parse_error",
    "encoding_error",
    "source_unavailable",
    "section_not_found",
]


class ToolError(BaseModel):
    """Why a section tool could not answer."""

    code: ErrorCode = Field(description="Stable machine-readable error code")
    message: str = Field(description="One-line summary, e.g. 'Section 'Plan' not found.'")
    details: dict[str, Any] | None = Field(
        default=None, description="Source path, line, input or available titles"
    )


class ToolEnvelope(BaseModel):
    """Answer of a section tool: either section data or a ToolError."""

    ok: bool = Field(description="True when the document was indexed and the request answered")
    data: Any | None = Field(default=None, description="SectionsData payload")
    error: ToolError | None = Field(default=None, description="Set when ok is false")

    @model_validator(mode="after")
    def _validate_coherence(self) -> "ToolEnvelope":
        if self.ok and self.error is not None:
            raise ValueError("a section answer cannot carry an error")
        if not self.ok and self.error is None:
            raise ValueError("a failed section answer needs an error code")
        return self


class SectionsData(BaseModel):
    """Inner `data` schema for section tools."""

    source: Literal["sections"] = "sections"
    action: Literal["browse", "query", "list"]
    entries: list[dict[str, Any]]
    summary: dict[str, Any] = Field(default_factory=dict)


def build_ok(data: Any) -> dict[str, Any]:
    """Build and validate a success envelope."""
    return ToolEnvelope(ok=True, data=data).model_dump(exclude_none=True)


def build_error(
    code: ErrorCode,
    message: str,
    details: dict[str, Any] | None = None,
    *,
    data: Any | None = None,
) -> dict[str, Any]:
    """Build and validate an error envelope."""
    return ToolEnvelope(
        ok=False,
        data=data,
        error=ToolError(code=code, message=message, details=details),
    ).model_dump(exclude_none=True)


def build_sections_data(
    *,
    action: Literal["browse", "query", "list"],
    entries: list[dict[str, Any]],
    summary: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build and validate section tool `data` payloads."""
    return SectionsData(
        action=action,
        entries=entries,
        summary=summary or {},
    ).model_dump(exclude_none=True)
