"""refindex MCP Server - reference section lookup exposed over MCP."""

import argparse
import logging
import os

from fastmcp import FastMCP

from refindex import __version__
from refindex.config import get_index_config
from refindex.errors import ParseError
from refindex.knowledge import DocumentLoader
from refindex.tools import browse_section, list_sections, query_sections

mcp = FastMCP(
    "refindex",
    instructions=(
        "Reference document index. "
        "Provides tools for listing the sections of an infrastructure "
        "reference guide, looking sections up by keyword or command name, "
        "and reading a section's prose and code examples."
    ),
)

logger = logging.getLogger("refindex.server")

query_sections.register(mcp)
list_sections.register(mcp)
browse_section.register(mcp)


def warm_index() -> bool:
    """Index the configured document before serving.

    Failures are logged, not raised: the tools report them to clients as
    error envelopes on every call until the document is fixed.
    """
    source = get_index_config().source
    try:
        index = DocumentLoader.load_index(source)
    except (ParseError, OSError) as exc:
        logger.warning("Reference document %s is not usable: %s", source, exc)
        return False
    logger.info("Serving %d sections from %s", len(index.sections), source)
    return True


def main():
    """Entry point for the refindex MCP server."""
    parser = argparse.ArgumentParser(
        prog="refindex-mcp",
        description="refindex MCP Server - reference section lookup over MCP",
    )
    parser.add_argument("--version", "-v", action="version", version=f"refindex {__version__}")
    parser.add_argument(
        "--source",
        default=None,
        help="Markdown document to serve (default: $REFINDEX_SOURCE or bundled guide)",
    )
    parser.add_argument(
        "--transport",
        choices=["stdio", "http", "sse"],
        default="stdio",
        help="Transport protocol (default: stdio)",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host to bind when using http/sse transport (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to bind when using http/sse transport (default: 8000)",
    )
    args = parser.parse_args()

    if args.source:
        os.environ["REFINDEX_SOURCE"] = args.source
    warm_index()

    run_kwargs: dict = {"transport": args.transport, "show_banner": False}
    if args.transport in ("http", "sse"):
        run_kwargs["host"] = args.host
        run_kwargs["port"] = args.port

    # Suppress noisy uvicorn shutdown messages
    logging.getLogger("uvicorn.error").setLevel(logging.CRITICAL)

    logger.debug("Starting refindex MCP server (%s)", args.transport)
    try:
        mcp.run(**run_kwargs)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
