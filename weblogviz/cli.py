"""weblogviz command line - rank the most requested paths of access logs."""
from __future__ import annotations

import logging
import sys
from argparse import ArgumentParser, Namespace
from typing import Any, Sequence

from pydantic import ValidationError
from pydantic_settings import BaseSettings

from weblogviz.config.settings import Settings, get_settings
from weblogviz.exceptions import AllSourcesFailedError, ConfigurationError
from weblogviz.logconfig import configure_logging
from weblogviz.report.formatter import render_report
from weblogviz.services.aggregation.service import compute_report
from weblogviz.services.ingestion.service import run_ingestion

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ALL_SOURCES_FAILED = 1
EXIT_CONFIGURATION_ERROR = 2


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser.

    Options left out on the command line fall back to the environment /
    .env settings, then to the defaults.
    """
    parser = ArgumentParser(
        prog="weblogviz",
        description="Rank the most requested paths of web server access logs.",
    )
    parser.add_argument(
        "paths",
        nargs="+",
        help="Log file(s) or directories, .gz files are decompressed",
    )
    parser.add_argument("-n", "--top", dest="top_n", type=int, help="Paths listed per ranking")
    parser.add_argument("-d", "--days", type=int, help="Most recent days to break down")
    parser.add_argument(
        "--include-errors",
        action="store_true",
        default=None,
        help="Count requests whose status is not 200",
    )
    parser.add_argument(
        "--include-media",
        action="store_true",
        default=None,
        help="Count static assets (css, js, images...)",
    )
    parser.add_argument(
        "--include-crawlers",
        action="store_true",
        default=None,
        help="Count requests from bots and HTTP libraries",
    )
    parser.add_argument(
        "--ignore-query-params",
        action="store_true",
        default=None,
        help="Group paths by the part before the first '?'",
    )
    parser.add_argument("--workers", type=int, help="Sources ingested concurrently")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Diagnostics level",
    )
    return parser


def _given(args: Namespace, *names: str) -> dict[str, Any]:
    return {name: getattr(args, name) for name in names if getattr(args, name) is not None}


def _override(section: BaseSettings, overrides: dict[str, Any]) -> Any:
    """Re-validate a settings section with command line values on top."""
    return type(section)(**{**section.model_dump(), **overrides})


def load_settings(args: Namespace) -> Settings:
    """Merge command line overrides on top of the environment settings.

    Raises:
        ConfigurationError: If a value fails validation.
    """
    try:
        base = get_settings()
        filters = _override(
            base.filters,
            _given(args, "include_errors", "include_media", "include_crawlers", "ignore_query_params"),
        )
        ingestion = _override(base.ingestion, _given(args, "workers"))
        report = _override(base.report, _given(args, "top_n", "days"))
        return Settings(
            **{
                **base.model_dump(exclude={"filters", "ingestion", "report"}),
                **_given(args, "log_level"),
            },
            filters=filters,
            ingestion=ingestion,
            report=report,
        )
    except ValidationError as e:
        raise ConfigurationError(str(e)) from e


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line and return the exit status."""
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIGURATION_ERROR

    configure_logging(settings.effective_log_level)
    logger.debug("%s %s settings: %s", settings.name, settings.version, settings.model_dump())

    try:
        result = run_ingestion(args.paths, settings.filters, settings.ingestion)
    except AllSourcesFailedError as e:
        logger.error("%s", e)
        for failure in e.failures:
            print(f"Skipped source {failure.source}: {failure.reason}", file=sys.stderr)
        return EXIT_ALL_SOURCES_FAILED

    if result.is_partial:
        logger.warning(
            "Report built from %d of %d sources", result.succeeded, result.sources
        )
    report = compute_report(result, settings.report.top_n, settings.report.days)
    print(render_report(report))
    return EXIT_OK


def run() -> None:
    """Console script entry point."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(130)
    except BrokenPipeError:
        sys.exit(0)
