"""Query service over a built section index.

Usage:
    >>> service = QueryService(build_index(parse_sections(text)))
    >>> [s.title for s in service.lookup("apply")]
    ['Apply']
    >>> service.lookup("nonexistent")
    []
"""

from typing import Any

from refindex.knowledge.index import SectionIndex
from refindex.knowledge.models import Section
from refindex.knowledge.tokenizer import TextTokenizer


class QueryService:
    """Read-only lookup operations over a SectionIndex.

    The service holds no mutable state, so one instance can serve any number
    of concurrent callers.
    """

    def __init__(self, index: SectionIndex, tokenizer: TextTokenizer | None = None):
        self.index = index
        self.tokenizer = tokenizer or TextTokenizer()

    def lookup(self, keyword: str) -> list[Section]:
        """Return sections matching a keyword, in document order.

        An exact keyword or anchor phrase ("terraform init") is looked up
        directly. Otherwise the query is tokenized and the sections holding
        every token are returned.

        Args:
            keyword: Keyword or phrase, case-insensitive

        Returns:
            Matching sections; empty list if nothing matches
        """
        normalized = TextTokenizer.normalize_query(keyword or "")
        if not normalized:
            return []

        positions = self.index.positions(normalized)
        if not positions:
            tokens = self.tokenizer.tokenize(normalized)
            if not tokens:
                return []
            matched = set(self.index.positions(tokens[0]))
            for token in tokens[1:]:
                matched &= set(self.index.positions(token))
            positions = tuple(sorted(matched))

        return [self.index.sections[p] for p in positions]

    def list_all(self) -> list[Section]:
        """Return every indexed section in document order."""
        return list(self.index.sections)

    def get(self, title: str) -> Section | None:
        """Return the first section whose title matches, ignoring case."""
        wanted = TextTokenizer.normalize_query(title or "")
        if not wanted:
            return None
        for section in self.index.sections:
            if TextTokenizer.normalize_query(section.title) == wanted:
                return section
        return None

    def keywords(self) -> list[str]:
        """Sorted keyword vocabulary."""
        return list(self.index.keywords)

    def stats(self) -> dict[str, Any]:
        return {
            "sections": len(self.index.sections),
            "keywords": len(self.index.keywords),
            "code_blocks": sum(len(s.code_blocks) for s in self.index.sections),
            "rejected": len(self.index.rejected),
        }
