import logging
import textwrap

import pytest

from refindex.knowledge import DocumentLoader


INIT_APPLY_DOC = textwrap.dedent(
    """\
    # Init

    Prepare the working directory.

    ```sh
    terraform init
    ```

    # Apply

    ```sh
    terraform apply -auto-approve
    ```
    """
)


@pytest.fixture(autouse=True)
def _clear_loader_cache():
    DocumentLoader.clear_cache()
    yield
    DocumentLoader.clear_cache()


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Undo CLI logging setup so caplog keeps seeing records."""
    yield
    package_logger = logging.getLogger("refindex")
    package_logger.handlers.clear()
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture()
def write_doc(tmp_path):
    """Write a markdown document and return its path."""

    def _write(text: str, name: str = "guide.md"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
