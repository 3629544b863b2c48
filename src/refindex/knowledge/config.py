"""Reference document path configuration.

Paths are resolved relative to this package's resources/ directory.
"""

from pathlib import Path

# Base path for bundled documents
_RESOURCES_DIR = Path(__file__).parent / "resources"

# Remote-state guide used when no source document is configured
DEFAULT_SOURCE = _RESOURCES_DIR / "remote_state.md"
