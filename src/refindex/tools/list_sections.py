"""Section List Tool - Outline of the reference document."""

from typing import Any

from fastmcp import FastMCP

from refindex.contracts import build_ok, build_sections_data
from refindex.errors import ParseError
from refindex.tools.index_access import build_load_error, get_query_service


def register(mcp: FastMCP) -> None:
    """Register ref_list_sections tool with the MCP server."""

    @mcp.tool()
    def ref_list_sections() -> dict[str, Any]:
        """List every section of the reference document in order.

        Each entry carries title, breadcrumb path, level and the command
        anchors found in its code blocks.

        Related tools:
        - ref_query_sections: Look up sections by keyword
        - ref_browse_section: Full content of one section
        """
        try:
            service = get_query_service()
        except (ParseError, OSError) as exc:
            return build_load_error(exc)

        entries = [section.to_dict() for section in service.list_all()]
        return build_ok(
            build_sections_data(
                action="list",
                entries=entries,
                summary={"count": len(entries), **service.stats()},
            )
        )
