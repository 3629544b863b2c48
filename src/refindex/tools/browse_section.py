"""Section Browse Tool - Retrieve one section with its code blocks."""

from typing import Any

from fastmcp import FastMCP

from refindex.contracts import build_error, build_ok, build_sections_data
from refindex.errors import ParseError
from refindex.knowledge import SectionFormatter
from refindex.tools.index_access import build_load_error, get_query_service
from refindex.utils import SectionTitle


def register(mcp: FastMCP) -> None:
    """Register ref_browse_section tool with the MCP server."""

    @mcp.tool()
    def ref_browse_section(title: SectionTitle) -> dict[str, Any]:
        """Get the full content of a section by title (like cat).

        Returns prose and code blocks in order, plus the section rendered
        back as markdown.

        Related tools:
        - ref_query_sections: Find the section title by keyword first
        """
        try:
            service = get_query_service()
        except (ParseError, OSError) as exc:
            return build_load_error(exc)

        section = service.get(title)
        if section is None:
            return build_error(
                "section_not_found",
                f"Section '{title}' not found.",
                {
                    "source": "sections",
                    "input": {"title": title},
                    "available_titles": [s.title for s in service.list_all()],
                },
            )

        entry = section.to_dict(include_body=True)
        entry["markdown"] = SectionFormatter.format_section(section)
        return build_ok(
            build_sections_data(
                action="browse",
                entries=[entry],
                summary={"count": 1},
            )
        )
