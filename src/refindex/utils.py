"""Validation types and input helpers for refindex tools."""

from typing import Annotated, Optional

from pydantic import Field
from pydantic.functional_validators import AfterValidator

from refindex.config import DEFAULT_MAX_RESULTS, MAX_RESULTS_LIMIT


def validate_non_empty_string(value: str) -> str:
    """Validate that a string is not empty after stripping whitespace."""
    stripped = value.strip()
    if not stripped:
        raise ValueError("Value cannot be empty or whitespace only")
    return stripped


# Keyword lookup
SectionKeyword = Annotated[
    str,
    AfterValidator(validate_non_empty_string),
    Field(
        ...,
        min_length=1,
        description=(
            "Keyword or command name to look up. Examples: 'apply', "
            "'terraform init', 'backend s3'. Case-insensitive."
        ),
    ),
]

# Exact section title
SectionTitle = Annotated[
    str,
    AfterValidator(validate_non_empty_string),
    Field(..., min_length=1, description="Section title, e.g. 'S3 Backend'. Case-insensitive."),
]

ResultLimit = Annotated[
    Optional[int],
    Field(
        default=None,
        ge=1,
        le=MAX_RESULTS_LIMIT,
        description=f"Maximum number of results (1-{MAX_RESULTS_LIMIT}). Defaults to {DEFAULT_MAX_RESULTS}.",
    ),
]
