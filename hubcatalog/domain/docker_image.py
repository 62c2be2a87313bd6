"""
hubcatalog/domain/docker_image.py

Domain models for registry ingestion.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

MAX_CATEGORY_SLOTS = 4
UNCATEGORIZED = "Uncategorized"


class ImageType:
    OFFICIAL = "Docker Official Image"
    VERIFIED_PUBLISHER = "Verified Publisher"
    SPONSORED_OSS = "Sponsored OSS"

    ALL: frozenset[str] = frozenset({OFFICIAL, VERIFIED_PUBLISHER, SPONSORED_OSS})


@dataclass(frozen=True)
class Source:
    """
    One registry namespace plus the classification label for its images.
    """

    namespace: str
    image_type: str

    def __post_init__(self) -> None:
        if not self.namespace.strip():
            raise ValueError("Source namespace must not be empty.")
        if self.image_type not in ImageType.ALL:
            allowed = ", ".join(sorted(ImageType.ALL))
            raise ValueError(f"Unsupported image type '{self.image_type}'. Allowed: {allowed}.")


@dataclass(frozen=True)
class RegistryPage:
    """
    One page of the repository listing; `next_url` is None on the last page.
    """

    url: str
    count: int
    next_url: str | None
    results: list[dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class DockerImageInput:
    """
    Normalized repository record prepared for persistence.
    """

    name: str
    namespace: str
    description: str
    pull_count: int
    star_count: int
    is_private: bool
    last_updated: datetime | None
    media_types: tuple[str, ...]
    content_types: tuple[str, ...]
    storage_size_bytes: int
    storage_size: str
    categories: tuple[str, ...]
    category_display: str
    category_slots: tuple[str, ...]
    image_type: str

    def __post_init__(self) -> None:
        if len(self.category_slots) > MAX_CATEGORY_SLOTS:
            raise ValueError(f"At most {MAX_CATEGORY_SLOTS} category slots are allowed.")

    @property
    def natural_key(self) -> tuple[str, str]:
        return (self.name, self.namespace)


@dataclass(frozen=True)
class SourceIngestionSummary:
    """
    Summary for one source ingestion run.
    """

    namespace: str
    image_type: str
    pages_fetched: int = 0
    records_inserted: int = 0
    records_existing: int = 0
    failed_records: int = 0
    status: str = "success"
    error: str | None = None
