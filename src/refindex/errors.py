"""Error types raised while parsing and indexing reference documents."""

from __future__ import annotations


class RefIndexError(Exception):
    """Base class for refindex errors."""


class ParseError(RefIndexError):
    """Malformed document structure. Aborts index construction."""

    def __init__(self, message: str, line: int | None = None):
        self.message = message
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class ValidationError(RefIndexError):
    """A single section failed a content rule and was left out of the index."""

    def __init__(self, message: str, *, title: str = "", line: int | None = None):
        self.message = message
        self.title = title
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class EncodingError(ParseError):
    """Document bytes are not valid UTF-8."""
