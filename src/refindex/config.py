"""Runtime configuration for refindex."""

from dataclasses import dataclass
import os
from pathlib import Path

from refindex.knowledge.config import DEFAULT_SOURCE

DEFAULT_MAX_RESULTS = 10
MAX_RESULTS_LIMIT = 50


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


@dataclass(frozen=True)
class IndexConfig:
    source: Path
    log_level: str
    max_results: int


def get_index_config() -> IndexConfig:
    """Load index config from environment variables."""
    return IndexConfig(
        source=Path(_env_str("REFINDEX_SOURCE", str(DEFAULT_SOURCE))),
        log_level=_env_str("REFINDEX_LOG_LEVEL", "WARNING").upper(),
        max_results=min(MAX_RESULTS_LIMIT, max(1, _env_int("REFINDEX_MAX_RESULTS", DEFAULT_MAX_RESULTS))),
    )
