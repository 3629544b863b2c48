"""Keyword index over parsed sections.

The index maps lowercase keywords to the positions of the sections they were
derived from. It is built once and read-only afterwards, so any number of
callers can share it.

Keywords come from:
- Section titles, tokenized
- Anchors (command names found in code blocks), tokenized
- Full anchor phrases, lowercased ("terraform init", "backend s3")
"""

import logging
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Iterable, Mapping

from refindex.errors import ValidationError
from refindex.knowledge.models import Section
from refindex.knowledge.tokenizer import TextTokenizer

logger = logging.getLogger("refindex.index")


@dataclass(frozen=True)
class SectionIndex:
    """Immutable keyword-to-section index.

    Attributes:
        sections: Indexed sections in document order; ``sections[i].position == i``
        keywords: keyword -> ascending positions into ``sections``
        rejected: Validation errors of the sections left out
    """

    sections: tuple[Section, ...] = ()
    keywords: Mapping[str, tuple[int, ...]] = field(default_factory=lambda: MappingProxyType({}))
    rejected: tuple[ValidationError, ...] = ()

    def __len__(self) -> int:
        return len(self.sections)

    def positions(self, keyword: str) -> tuple[int, ...]:
        return self.keywords.get(keyword, ())


def validate_section(section: Section) -> None:
    """Raise ValidationError if the section cannot be indexed."""
    if not section.title.strip():
        raise ValidationError("section has an empty title", title=section.title, line=section.line)


def section_keywords(section: Section, tokenizer: TextTokenizer) -> set[str]:
    """Return every keyword a section is reachable by."""
    keywords = tokenizer.tokenize_to_set(section.title)
    for anchor in section.anchors:
        keywords.update(tokenizer.tokenize(anchor))
        keywords.add(TextTokenizer.normalize_query(anchor))
    return keywords


def build_index(sections: Iterable[Section], tokenizer: TextTokenizer | None = None) -> SectionIndex:
    """Build an index from sections in document order.

    Sections that fail validation are logged, collected in
    ``SectionIndex.rejected`` and skipped; the rest still index. A
    ParseError raised while iterating ``sections`` propagates and no index
    is produced.

    Example:
        >>> index = build_index([Section("Init"), Section("Apply")])
        >>> index.positions("apply")
        (1,)
    """
    tokenizer = tokenizer or TextTokenizer()
    indexed: list[Section] = []
    rejected: list[ValidationError] = []
    postings: dict[str, list[int]] = {}

    for section in sections:
        try:
            validate_section(section)
        except ValidationError as exc:
            logger.warning("Skipping section: %s", exc)
            rejected.append(exc)
            continue

        position = len(indexed)
        if section.position != position:
            section = replace(section, position=position)
        indexed.append(section)

        for keyword in section_keywords(section, tokenizer):
            postings.setdefault(keyword, []).append(position)

    keywords = {keyword: tuple(postings[keyword]) for keyword in sorted(postings)}
    logger.debug("Indexed %d sections, %d keywords", len(indexed), len(keywords))
    return SectionIndex(
        sections=tuple(indexed),
        keywords=MappingProxyType(keywords),
        rejected=tuple(rejected),
    )
