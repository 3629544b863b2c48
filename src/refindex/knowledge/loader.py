"""Data loading layer for reference documents.

Responsibilities:
- Read a document from a path or an open text stream
- Parse it into sections and build the keyword index
- Cache indexes per path to avoid repeated I/O
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import TextIO, Union

from refindex.errors import EncodingError
from refindex.knowledge.index import SectionIndex, build_index
from refindex.knowledge.parser import parse_sections
from refindex.knowledge.query import QueryService

logger = logging.getLogger("refindex.loader")

Source = Union[str, Path, TextIO]


class DocumentLoader:
    """Loads reference documents and builds their indexes.

    All methods are static; indexes built from paths are cached until
    ``clear_cache`` is called.
    """

    @staticmethod
    def read_text(source: Source) -> str:
        """Read the raw document text.

        Args:
            source: File path, or a readable text stream (left open)

        Raises:
            FileNotFoundError: If the path doesn't exist
            EncodingError: If the bytes are not valid UTF-8
        """
        if hasattr(source, "read"):
            try:
                return source.read()
            except UnicodeDecodeError as exc:
                raise EncodingError(f"document is not valid UTF-8 ({exc.reason})") from exc

        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"Reference document not found: {path}")

        with open(path, "rb") as f:
            data = f.read()

        try:
            return data.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            line = data.count(b"\n", 0, exc.start) + 1
            raise EncodingError(f"document is not valid UTF-8 ({exc.reason})", line) from exc

    @staticmethod
    def build(source: Source) -> SectionIndex:
        """Read, parse and index a document without caching.

        Raises:
            FileNotFoundError: If the path doesn't exist
            ParseError: If the document structure is malformed
        """
        text = DocumentLoader.read_text(source)
        index = build_index(parse_sections(text))
        logger.info(
            "Loaded %s: %d sections indexed, %d rejected",
            getattr(source, "name", source),
            len(index.sections),
            len(index.rejected),
        )
        return index

    @staticmethod
    @lru_cache(maxsize=8)
    def _load_cached(path: str) -> SectionIndex:
        return DocumentLoader.build(path)

    @staticmethod
    def load_index(source: Source) -> SectionIndex:
        """Load an index, cached per resolved path.

        Streams are never cached.

        Example:
            >>> index = DocumentLoader.load_index("docs/remote_state.md")
            >>> index.sections[0].title
            'Remote State'
        """
        if hasattr(source, "read"):
            return DocumentLoader.build(source)
        return DocumentLoader._load_cached(str(Path(source).resolve()))

    @staticmethod
    def load_service(source: Source) -> QueryService:
        return QueryService(DocumentLoader.load_index(source))

    @staticmethod
    def clear_cache() -> None:
        """Clear all cached indexes.

        Useful for testing or when documents are updated.
        """
        DocumentLoader._load_cached.cache_clear()


def load_index(source: Source) -> SectionIndex:
    return DocumentLoader.load_index(source)
