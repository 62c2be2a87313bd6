"""
hubcatalog/services/image_ingestion_service.py

Orchestration service for registry namespace ingestion.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import replace
from typing import Protocol

from pydantic import ValidationError

from hubcatalog.connectors.errors import RegistryFetchError
from hubcatalog.domain.docker_image import RegistryPage, Source, SourceIngestionSummary
from hubcatalog.mappers.docker_image_mapper import to_docker_image_input
from hubcatalog.storage.base import ImageSink, WriteFailure

logger = logging.getLogger(__name__)


class PageFetcher(Protocol):
    def iter_pages(self, start_url: str) -> Iterator[RegistryPage]: ...


class SourceIngestionError(RuntimeError):
    """
    Raised when fetching a source fails; names the source and the failing URL.
    """

    def __init__(self, *, source: Source, url: str, cause: RegistryFetchError) -> None:
        super().__init__(
            f"Error processing {source.image_type} repositories for {source.namespace} "
            f"at {url}: {cause}"
        )
        self.source = source
        self.url = url
        self.cause = cause


class ImageIngestionService:
    """
    Coordinates paginated fetching, normalization and idempotent persistence.
    """

    def __init__(
        self,
        *,
        fetcher: PageFetcher,
        sink: ImageSink,
        registry_base_url: str,
        fail_fast: bool = True,
    ) -> None:
        self._fetcher = fetcher
        self._sink = sink
        self._registry_base_url = registry_base_url.rstrip("/")
        self._fail_fast = fail_fast

    def source_url(self, source: Source) -> str:
        return f"{self._registry_base_url}/{source.namespace}/"

    def run(self, sources: Sequence[Source]) -> list[SourceIngestionSummary]:
        """
        Ingest sources one at a time, in the given order.

        With fail-fast enabled the first source fetch failure propagates and
        ends the run. Otherwise the failure is recorded on that source's
        summary and the run moves on to the next source.
        """

        summaries: list[SourceIngestionSummary] = []
        for source in sources:
            try:
                summaries.append(self.ingest(source))
            except SourceIngestionError as exc:
                if self._fail_fast:
                    raise
                logger.error(
                    "Source ingestion failed namespace=%s image_type=%s url=%s error=%s",
                    source.namespace,
                    source.image_type,
                    exc.url,
                    exc.cause,
                )
                summaries.append(
                    SourceIngestionSummary(
                        namespace=source.namespace,
                        image_type=source.image_type,
                        status="failed",
                        error=str(exc),
                    )
                )
        return summaries

    def ingest(self, source: Source) -> SourceIngestionSummary:
        """
        Fetch every page of one source and hand each record to the sink.
        """

        summary = SourceIngestionSummary(namespace=source.namespace, image_type=source.image_type)
        try:
            for page in self._fetcher.iter_pages(self.source_url(source)):
                summary = self._ingest_page(page, source, summary)
        except RegistryFetchError as exc:
            raise SourceIngestionError(source=source, url=exc.url, cause=exc) from exc

        if summary.failed_records:
            summary = replace(summary, status="partial_success")
        logger.info(
            "Source ingestion completed namespace=%s image_type=%s pages=%s inserted=%s existing=%s failed=%s",
            summary.namespace,
            summary.image_type,
            summary.pages_fetched,
            summary.records_inserted,
            summary.records_existing,
            summary.failed_records,
        )
        return summary

    def _ingest_page(
        self,
        page: RegistryPage,
        source: Source,
        summary: SourceIngestionSummary,
    ) -> SourceIngestionSummary:
        inserted = summary.records_inserted
        existing = summary.records_existing
        failed = summary.failed_records

        for item in page.results:
            try:
                record = to_docker_image_input(item, source)
            except (ValidationError, ValueError) as exc:
                failed += 1
                logger.warning(
                    "Failed to normalize repository namespace=%s name=%s error=%s",
                    item.get("namespace"),
                    item.get("name"),
                    exc,
                )
                continue

            try:
                was_inserted = self._sink.upsert(record)
            except WriteFailure as exc:
                failed += 1
                logger.error("Error inserting repository data: %s", exc)
                continue

            if was_inserted:
                inserted += 1
                logger.info("Inserted repository: %s/%s", record.namespace, record.name)
            else:
                existing += 1
                logger.debug("Repository already stored: %s/%s", record.namespace, record.name)

        return replace(
            summary,
            pages_fetched=summary.pages_fetched + 1,
            records_inserted=inserted,
            records_existing=existing,
            failed_records=failed,
        )
