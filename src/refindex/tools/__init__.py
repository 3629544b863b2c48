"""refindex MCP tool implementations."""

from . import (
    browse_section,
    list_sections,
    query_sections,
)

__all__ = [
    "browse_section",
    "list_sections",
    "query_sections",
]
