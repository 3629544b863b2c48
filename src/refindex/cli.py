"""refindex command line.

Usage:
    refindex list
    refindex query terraform init
    refindex show "S3 Backend"
    refindex --source guide.md --json query apply

Exit codes:
    0  results printed
    1  no section matched
    2  the document could not be read or parsed
"""

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from refindex import __version__
from refindex.config import get_index_config
from refindex.errors import EncodingError, ParseError
from refindex.knowledge import DocumentLoader, QueryService, SectionFormatter

logger = logging.getLogger("refindex.cli")

EXIT_OK = 0
EXIT_NO_MATCH = 1
EXIT_ERROR = 2

MAX_HINTS = 12


def configure_logging(level: str) -> None:
    """Send refindex log records to stderr."""
    package_logger = logging.getLogger("refindex")
    package_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    package_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)s - %(message)s"))
    package_logger.addHandler(handler)
    package_logger.propagate = False


def build_parser() -> argparse.ArgumentParser:
    cfg = get_index_config()
    parser = argparse.ArgumentParser(
        prog="refindex",
        description="Look up sections of a markdown reference document",
    )
    parser.add_argument("--version", "-v", action="version", version=f"refindex {__version__}")
    parser.add_argument(
        "--source",
        default=str(cfg.source),
        help="Markdown document to index, or '-' for stdin (default: $REFINDEX_SOURCE or bundled guide)",
    )
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument(
        "--log-level",
        default=cfg.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help=f"Log level for stderr diagnostics (default: {cfg.log_level})",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    query = subparsers.add_parser("query", help="Print sections matching a keyword")
    query.add_argument("keyword", nargs="+", help="Keyword or command name, e.g. 'apply' or 'terraform init'")

    subparsers.add_parser("list", help="Print every section in document order")

    show = subparsers.add_parser("show", help="Print one section as markdown")
    show.add_argument("title", nargs="+", help="Section title, case-insensitive")

    return parser


def _load_service(source: str) -> QueryService:
    if source == "-":
        return QueryService(DocumentLoader.build(sys.stdin))
    return DocumentLoader.load_service(source)


def _print_sections(sections, as_json: bool) -> None:
    if as_json:
        print(json.dumps([section.to_dict() for section in sections], indent=2))
    elif sections:
        print(SectionFormatter.format_listing(sections))


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for the refindex command line."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        service = _load_service(args.source)
    except EncodingError as exc:
        print(f"refindex: cannot decode {args.source}: {exc}", file=sys.stderr)
        return EXIT_ERROR
    except ParseError as exc:
        print(f"refindex: cannot parse {args.source}: {exc}", file=sys.stderr)
        return EXIT_ERROR
    except OSError as exc:
        print(f"refindex: {exc}", file=sys.stderr)
        return EXIT_ERROR

    if args.command == "list":
        _print_sections(service.list_all(), args.json)
        return EXIT_OK

    if args.command == "query":
        keyword = " ".join(args.keyword)
        results = service.lookup(keyword)
        if not results:
            if args.json:
                print("[]")
            else:
                print(
                    SectionFormatter.format_no_match(keyword, service.keywords()[:MAX_HINTS]),
                    file=sys.stderr,
                )
            return EXIT_NO_MATCH
        _print_sections(results, args.json)
        return EXIT_OK

    title = " ".join(args.title)
    section = service.get(title)
    if section is None:
        print(f"refindex: no section titled '{title}'", file=sys.stderr)
        return EXIT_NO_MATCH
    if args.json:
        print(json.dumps(section.to_dict(include_body=True), indent=2))
    else:
        print(SectionFormatter.format_section(section), end="")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
