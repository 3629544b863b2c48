"""Section parser for markdown reference documents.

Splits raw text into titled sections. Each section's body is an ordered
sequence of prose and fenced code blocks; anchors are extracted from the
code blocks as the section is closed.

Rules:
- ATX headings (``#`` .. ``######``) open a new section
- Fences of 3+ backticks or tildes open a code block, closed by a fence of
  the same character that is at least as long
- Headings inside code blocks are content, not headings
- YAML front matter at the very top of the document is skipped
"""

import logging
import re
from typing import Iterator, List, Optional

from refindex.errors import ParseError
from refindex.knowledge.anchors import extract_anchors
from refindex.knowledge.models import Block, CodeBlock, Section, TextBlock

logger = logging.getLogger("refindex.parser")

HEADING_PATTERN = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*?))?[ \t]*$")
CLOSING_HASHES = re.compile(r"(?:^|[ \t]+)#+$")
FENCE_PATTERN = re.compile(r"^ {0,3}(`{3,}|~{3,})[ \t]*([^`]*?)[ \t]*$")
FRONT_MATTER_DELIMITER = "---"
BYTE_ORDER_MARK = "\ufeff"


class _SectionDraft:
    """Mutable accumulator for the section being parsed."""

    def __init__(self, title: str, level: int, line: int, parents: tuple[str, ...]):
        self.title = title
        self.level = level
        self.line = line
        self.parents = parents
        self.blocks: List[Block] = []
        self.text_lines: List[str] = []
        self.text_start = 0

    def add_text(self, line: str, lineno: int) -> None:
        if not self.text_lines:
            if not line.strip():
                return
            self.text_start = lineno
        self.text_lines.append(line.rstrip("\r\n"))

    def flush_text(self) -> None:
        while self.text_lines and not self.text_lines[-1].strip():
            self.text_lines.pop()
        if self.text_lines:
            self.blocks.append(TextBlock("\n".join(self.text_lines), self.text_start))
        self.text_lines = []

    def add_code(self, block: CodeBlock) -> None:
        self.flush_text()
        self.blocks.append(block)

    def finish(self, position: int) -> Section:
        self.flush_text()
        body = tuple(self.blocks)
        code_blocks = [block for block in body if isinstance(block, CodeBlock)]
        return Section(
            title=self.title,
            level=self.level,
            body=body,
            anchors=extract_anchors(code_blocks),
            position=position,
            line=self.line,
            parents=self.parents,
        )


class SectionParser:
    """Restartable section parser.

    Iterating the parser re-parses the input from the start, so the same
    instance yields an equal sequence every time.

    Usage:
        >>> parser = SectionParser("# Init\\n```sh\\nterraform init\\n```\\n")
        >>> [section.title for section in parser]
        ['Init']
        >>> sorted(next(iter(parser)).anchors)
        ['terraform init']
    """

    def __init__(self, text: str):
        self.text = text

    def __iter__(self) -> Iterator[Section]:
        return parse_sections(self.text)


def _heading(line: str) -> Optional[tuple[int, str]]:
    match = HEADING_PATTERN.match(line.rstrip("\r\n"))
    if not match:
        return None
    title = CLOSING_HASHES.sub("", match.group(2) or "").strip()
    return len(match.group(1)), title


def _skip_front_matter(lines: List[str]) -> int:
    """Return the index of the first line after YAML front matter."""
    if not lines or lines[0].rstrip("\r\n") != FRONT_MATTER_DELIMITER:
        return 0
    for index in range(1, len(lines)):
        if lines[index].rstrip("\r\n") in (FRONT_MATTER_DELIMITER, "..."):
            return index + 1
    raise ParseError("front matter is opened but never closed", 1)


def parse_sections(text: str) -> Iterator[Section]:
    """Lazily parse sections from raw markdown text.

    Args:
        text: Raw document text

    Yields:
        Section objects in document order

    Raises:
        ParseError: When a code block is never closed, or when content
            appears before the first heading (a section with no title)
    """
    # Byte-order mark written by some editors
    if text.startswith(BYTE_ORDER_MARK):
        text = text[len(BYTE_ORDER_MARK):]
    lines = text.splitlines(keepends=True)
    start = _skip_front_matter(lines)

    draft: Optional[_SectionDraft] = None
    # (level, title) of open headings, for breadcrumbs
    stack: List[tuple[int, str]] = []
    position = 0

    fence: Optional[str] = None
    fence_language = ""
    fence_line = 0
    code_lines: List[str] = []

    for index in range(start, len(lines)):
        raw = lines[index]
        lineno = index + 1
        line = raw.rstrip("\r\n")

        if fence is not None:
            closing = FENCE_PATTERN.match(line)
            if (
                closing
                and not closing.group(2)
                and closing.group(1)[0] == fence[0]
                and len(closing.group(1)) >= len(fence)
            ):
                draft.add_code(CodeBlock(fence_language, "".join(code_lines), fence, fence_line))
                fence = None
                code_lines = []
            else:
                code_lines.append(raw)
            continue

        opening = FENCE_PATTERN.match(line)
        if opening:
            if draft is None:
                raise ParseError("code block appears before any section heading", lineno)
            fence = opening.group(1)
            info = opening.group(2).split()
            fence_language = info[0].lower() if info else ""
            fence_line = lineno
            continue

        heading = _heading(line)
        if heading:
            if draft is not None:
                yield draft.finish(position)
                position += 1
            level, title = heading
            while stack and stack[-1][0] >= level:
                stack.pop()
            draft = _SectionDraft(title, level, lineno, tuple(t for _, t in stack))
            stack.append((level, title))
            continue

        if draft is None:
            if line.strip():
                raise ParseError("content appears before any section heading", lineno)
            continue

        draft.add_text(raw, lineno)

    if fence is not None:
        raise ParseError(f"code block opened with {fence!r} is never closed", fence_line)

    if draft is not None:
        yield draft.finish(position)
