"""Command-line front end: prompt for a query, print ranked files."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
import logging
from pathlib import Path
import re
import sys
from typing import TextIO

from opentelemetry.sdk.trace.export import ConsoleSpanExporter
import orjson
from pydantic import ValidationError

from workspace_search.config import Settings
from workspace_search.observability.logging import configure_logging
from workspace_search.observability.metrics import get_metrics
from workspace_search.observability.tracing import init_tracing
from workspace_search.search.models import MatchResult
from workspace_search.service_layer.search_service import EmptyQueryError, SearchService


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_QUERY = 1
EXIT_CONFIG_ERROR = 2

_WHITESPACE_PATTERN = re.compile(r"\s+")


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="workspace-search",
        description="Typo-tolerant search over the text files of a project tree",
    )
    parser.add_argument(
        "root",
        nargs="?",
        type=Path,
        default=Path("."),
        help="Workspace root to index (default: current directory)",
    )
    parser.add_argument(
        "query",
        nargs="?",
        help="Search query; prompted for when omitted (e.g. 'index file')",
    )
    parser.add_argument("--threshold", type=float, help="Maximum tolerated distance in [0, 1]")
    parser.add_argument("--name-weight", type=float, help="Weight of the file name field")
    parser.add_argument("--content-weight", type=float, help="Weight of the file content field")
    parser.add_argument("--limit", type=int, help="Maximum number of results to print")
    parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument("--log-level", help="Override LOG_LEVEL for this run")
    parser.add_argument(
        "--trace",
        action="store_true",
        default=None,
        help="Print finished OpenTelemetry spans to stderr (same as TRACE_CONSOLE=true)",
    )
    parser.add_argument(
        "--metrics",
        action="store_true",
        help="Print Prometheus metrics for this run to stderr after the results",
    )
    return parser


def _load_settings(args: argparse.Namespace) -> Settings:
    """Environment settings with command-line flags taking precedence."""
    overrides: dict[str, object] = {}
    if args.threshold is not None:
        overrides["search_threshold"] = args.threshold
    if args.name_weight is not None:
        overrides["search_name_weight"] = args.name_weight
    if args.content_weight is not None:
        overrides["search_content_weight"] = args.content_weight
    if args.limit is not None:
        overrides["search_result_limit"] = args.limit
    if args.log_level:
        overrides["log_level"] = args.log_level
    if args.trace:
        overrides["trace_console"] = True
    return Settings(**overrides)


def format_result(result: MatchResult) -> str:
    """Render one result as a label line plus an indented detail line."""
    label = _WHITESPACE_PATTERN.sub(" ", f"{result.display_name} - {result.snippet}")
    return f"{label}\n    {result.document_id} (Score: {result.score:.3f})"


def _print_results(results: list[MatchResult], output_format: str, out: TextIO) -> None:
    if output_format == "json":
        out.write(orjson.dumps([result.to_dict() for result in results], option=orjson.OPT_INDENT_2).decode())
        out.write("\n")
        return
    for result in results:
        out.write(format_result(result) + "\n")


def _read_query(args: argparse.Namespace) -> str:
    if args.query is not None:
        return args.query
    try:
        return input("Enter your search query (e.g. 'index file'): ")
    except EOFError:
        return ""


def _run_query(service: SearchService, query: str, output_format: str, out: TextIO) -> int:
    try:
        results = service.search(query)
    except EmptyQueryError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_NO_QUERY

    if not results and output_format == "text":
        out.write(f"No results found for query: {query}\n")
        return EXIT_OK

    _print_results(results, output_format, out)
    return EXIT_OK


def main(argv: Sequence[str] | None = None, *, out: TextIO | None = None) -> int:
    out = out or sys.stdout
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    try:
        settings = _load_settings(args)
    except ValidationError as exc:
        configure_logging()
        logger.error("Invalid configuration: %s", exc)
        return EXIT_CONFIG_ERROR

    configure_logging(settings.log_level, settings.log_json)
    init_tracing(exporter=ConsoleSpanExporter(out=sys.stderr) if settings.trace_console else None)

    try:
        service = SearchService.from_settings(settings, args.root)
    except (NotADirectoryError, ValueError) as exc:
        logger.error("%s", exc)
        return EXIT_CONFIG_ERROR

    query = _read_query(args)
    exit_code = _run_query(service, query, args.format, out)
    if args.metrics:
        sys.stderr.write(get_metrics().decode("utf-8"))
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
