"""
Run registry image ingestion from CLI.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from collections.abc import Sequence
from dataclasses import asdict

from db.config import DatabaseConfigurationError
from db.session import run_session
from hubcatalog.config import get_ingestion_settings, get_registry_http_settings
from hubcatalog.connectors import RegistryFetcher
from hubcatalog.domain import Source
from hubcatalog.services import ImageIngestionService, SourceIngestionError
from hubcatalog.storage import SQLAlchemyImageSink

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_SOURCE_FAILED = 1
EXIT_CONFIG_ERROR = 2


def _configure_logging(level_name: str | None) -> None:
    """
    Configure root logging once for the ingestion process.
    """

    log_level = (level_name or os.getenv("LOG_LEVEL", "INFO")).strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def select_sources(configured: Sequence[Source], namespaces: Sequence[str] | None) -> list[Source]:
    """
    Keep configured sources matching `namespaces`, preserving configured order.
    """

    if not namespaces:
        return list(configured)

    wanted = {namespace.strip().lower() for namespace in namespaces}
    known = {source.namespace.lower() for source in configured}
    unknown = sorted(wanted - known)
    if unknown:
        raise ValueError(f"Unsupported namespace(s): {', '.join(unknown)}.")
    return [source for source in configured if source.namespace.lower() in wanted]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Ingest registry repositories into PostgreSQL.")
    parser.add_argument(
        "--namespace",
        dest="namespaces",
        action="append",
        default=None,
        help="Only ingest this configured namespace. Repeatable.",
    )
    parser.add_argument(
        "--continue-on-error",
        dest="continue_on_error",
        action="store_true",
        help="Record a failed source and move on instead of aborting the run.",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default=None,
        help="Logging level (defaults to LOG_LEVEL or INFO).",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.log_level)

    http_settings = get_registry_http_settings()
    ingestion_settings = get_ingestion_settings()
    try:
        sources = select_sources(ingestion_settings.sources(), args.namespaces)
    except ValueError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    fail_fast = ingestion_settings.fail_fast and not args.continue_on_error
    try:
        with run_session() as db, RegistryFetcher(http_settings=http_settings) as fetcher:
            service = ImageIngestionService(
                fetcher=fetcher,
                sink=SQLAlchemyImageSink(session=db),
                registry_base_url=http_settings.base_url,
                fail_fast=fail_fast,
            )
            summaries = service.run(sources)
    except SourceIngestionError as exc:
        logger.error(
            "Aborting run namespace=%s image_type=%s url=%s",
            exc.source.namespace,
            exc.source.image_type,
            exc.url,
        )
        print(f"Fatal: {exc}", file=sys.stderr)
        return EXIT_SOURCE_FAILED
    except DatabaseConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    print(json.dumps([asdict(summary) for summary in summaries], indent=2))
    if any(summary.status == "failed" for summary in summaries):
        return EXIT_SOURCE_FAILED
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
