"""Data models for parsed reference documents.

A document is a flat, ordered sequence of sections. Each section owns an
ordered body of prose and code blocks plus the set of command anchors its
code blocks reference.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class CodeBlock:
    """Fenced code block.

    Attributes:
        language: First word of the fence info string, lowercased ("" if none)
        content: Exact text between the fences, line endings preserved
        fence: Opening fence marker, e.g. "```" or "~~~~"
        line: 1-based line of the opening fence
    """

    language: str
    content: str
    fence: str = "```"
    line: int = 0

    def to_markdown(self) -> str:
        """Re-serialize the block with its original fence.

        Example:
            >>> CodeBlock("sh", "terraform init\\n").to_markdown()
            '```sh\\nterraform init\\n```\\n'
        """
        body = self.content
        if body and not body.endswith(("\n", "\r")):
            body += "\n"
        return f"{self.fence}{self.language}\n{body}{self.fence}\n"

    def to_dict(self) -> dict[str, Any]:
        return {"type": "code", "language": self.language, "content": self.content}


@dataclass(frozen=True)
class TextBlock:
    """Run of prose lines between code blocks."""

    text: str
    line: int = 0

    def to_markdown(self) -> str:
        return self.text + "\n"

    def to_dict(self) -> dict[str, Any]:
        return {"type": "text", "text": self.text}


Block = Union[TextBlock, CodeBlock]


@dataclass(frozen=True)
class Section:
    """A titled unit of reference content.

    Attributes:
        title: Heading text, stripped
        level: Heading level (1-6)
        body: Ordered text and code blocks following the heading
        anchors: Command names referenced by the code blocks
            Examples: "terraform init", "backend s3"
        position: 0-based document order
        line: 1-based line of the heading
        parents: Titles of the enclosing headings, outermost first

    Usage:
        >>> section = Section(
        ...     title="Apply",
        ...     level=2,
        ...     body=(CodeBlock("sh", "terraform apply\\n"),),
        ...     anchors=frozenset({"terraform apply"}),
        ... )
        >>> section.code_blocks[0].language
        'sh'
    """

    title: str
    level: int = 1
    body: tuple[Block, ...] = ()
    anchors: frozenset[str] = field(default_factory=frozenset)
    position: int = 0
    line: int = 0
    parents: tuple[str, ...] = ()

    @property
    def code_blocks(self) -> tuple[CodeBlock, ...]:
        return tuple(block for block in self.body if isinstance(block, CodeBlock))

    @property
    def text(self) -> str:
        """Prose of the section joined by blank lines."""
        return "\n\n".join(block.text for block in self.body if isinstance(block, TextBlock))

    @property
    def path(self) -> str:
        """Breadcrumb, e.g. "Remote State > S3 Backend"."""
        return " > ".join((*self.parents, self.title))

    def summary(self, max_length: int = 80) -> str:
        """First line of prose, shortened to max_length."""
        for block in self.body:
            if isinstance(block, TextBlock):
                first = block.text.splitlines()[0].strip()
                if len(first) > max_length:
                    first = first[: max_length - 3] + "..."
                return first
        return ""

    def to_dict(self, include_body: bool = False) -> dict[str, Any]:
        data: dict[str, Any] = {
            "title": self.title,
            "level": self.level,
            "position": self.position,
            "line": self.line,
            "path": self.path,
            "anchors": sorted(self.anchors),
            "code_blocks": len(self.code_blocks),
            "summary": self.summary(),
        }
        if include_body:
            data["body"] = [block.to_dict() for block in self.body]
        return data
