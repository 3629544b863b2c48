"""Plain-text and markdown rendering of sections.

Formatting goals:
- One line per section in listings, with breadcrumb and anchors
- Full sections rendered back as markdown, code blocks byte-identical
"""

from typing import Iterable

from refindex.knowledge.models import Section


class SectionFormatter:
    """Format sections for terminal and LLM consumption."""

    @staticmethod
    def format_summary_line(section: Section) -> str:
        """Format a single listing line.

        Example:
            >>> SectionFormatter.format_summary_line(section)
            '[3] Remote State > Init (terraform init)'
        """
        line = f"[{section.position}] {section.path}"
        if section.anchors:
            line += f" ({', '.join(sorted(section.anchors))})"
        return line

    @staticmethod
    def format_listing(sections: Iterable[Section]) -> str:
        return "\n".join(SectionFormatter.format_summary_line(s) for s in sections)

    @staticmethod
    def format_section(section: Section) -> str:
        """Render a full section as markdown."""
        parts = [f"{'#' * section.level} {section.title}\n"]
        for block in section.body:
            parts.append("\n")
            parts.append(block.to_markdown())
        return "".join(parts)

    @staticmethod
    def format_code_blocks(section: Section) -> str:
        """Re-serialize only the section's code blocks."""
        return "".join(block.to_markdown() for block in section.code_blocks)

    @staticmethod
    def format_no_match(keyword: str, hints: list[str]) -> str:
        message = f"No sections match '{keyword}'."
        if hints:
            message += f"\nKnown keywords include: {', '.join(hints)}"
        return message
