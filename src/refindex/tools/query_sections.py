"""Section Query Tool - Keyword lookup over the reference document."""

from typing import Any

from fastmcp import FastMCP

from refindex.config import get_index_config
from refindex.contracts import build_ok, build_sections_data
from refindex.errors import ParseError
from refindex.tools.index_access import build_load_error, get_query_service
from refindex.utils import ResultLimit, SectionKeyword

MAX_HINTS = 20


def register(mcp: FastMCP) -> None:
    """Register ref_query_sections tool with the MCP server."""

    @mcp.tool()
    def ref_query_sections(
        keyword: SectionKeyword,
        limit: ResultLimit = None,
    ) -> dict[str, Any]:
        """Look up reference sections by keyword or command name (like grep).

        Returns matching sections in document order. Use ref_browse_section
        for the full text and code of a section.

        When to use:
        - You know a command or topic but not the section title
        - Example: "apply", "terraform init", "backend s3"

        Related tools:
        - ref_list_sections: Outline of every section
        - ref_browse_section: Full content of one section
        """
        try:
            service = get_query_service()
        except (ParseError, OSError) as exc:
            return build_load_error(exc)

        results = service.lookup(keyword)
        cap = limit or get_index_config().max_results
        entries = [section.to_dict() for section in results[:cap]]

        payload: dict[str, Any] = build_sections_data(
            action="query",
            entries=entries,
            summary={
                "count": len(entries),
                "total_matches": len(results),
            },
        )

        if not results:
            payload["summary"]["hints"] = [
                "Try a single keyword (for example: init, apply, backend).",
                "Try a full command name (for example: terraform plan).",
            ]
            payload["summary"]["known_keywords"] = service.keywords()[:MAX_HINTS]

        return build_ok(payload)
