"""
hubcatalog/mappers/docker_image_mapper.py

Normalization of registry listing items into persistable records.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping, Sequence

from hubcatalog.domain.docker_image import MAX_CATEGORY_SLOTS, UNCATEGORIZED, DockerImageInput, Source
from hubcatalog.schemas.registry import RegistryRepositoryItem

logger = logging.getLogger(__name__)

_KB = 1 << 10
_MB = 1 << 20
_GB = 1 << 30


@dataclass(frozen=True)
class CategoryFields:
    """
    Display string plus the bounded, ordered category slots.
    """

    display: str
    slots: tuple[str, ...]


def format_storage_size(size_bytes: int) -> str:
    """
    Render a byte count with base-1024 units and two decimals.
    """

    if size_bytes >= _GB:
        return f"{size_bytes / _GB:.2f} GB"
    if size_bytes >= _MB:
        return f"{size_bytes / _MB:.2f} MB"
    if size_bytes >= _KB:
        return f"{size_bytes / _KB:.2f} KB"
    return f"{size_bytes} Bytes"


def derive_categories(names: Sequence[str]) -> CategoryFields:
    if not names:
        return CategoryFields(display=UNCATEGORIZED, slots=())
    return CategoryFields(
        display=", ".join(names),
        slots=tuple(names[:MAX_CATEGORY_SLOTS]),
    )


def parse_iso_datetime(value: str | None) -> datetime | None:
    """
    Parse an ISO datetime string into a timezone-aware datetime.
    """

    if not value:
        return None
    normalized = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError:
        logger.warning("Unparseable last_updated value=%r", value)
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def to_docker_image_input(raw_item: Mapping[str, Any], source: Source) -> DockerImageInput:
    """
    Validate one raw listing item, attach the source label and derive display fields.

    Raises pydantic.ValidationError when the item does not match the item shape.
    """

    item = RegistryRepositoryItem.model_validate(raw_item)
    category_names = tuple(category.name for category in item.categories)
    categories = derive_categories(category_names)
    return DockerImageInput(
        name=item.name,
        namespace=item.namespace,
        description=item.description,
        pull_count=item.pull_count,
        star_count=item.star_count,
        is_private=item.is_private,
        last_updated=parse_iso_datetime(item.last_updated),
        media_types=tuple(item.media_types),
        content_types=tuple(item.content_types),
        storage_size_bytes=item.storage_size,
        storage_size=format_storage_size(item.storage_size),
        categories=category_names,
        category_display=categories.display,
        category_slots=categories.slots,
        image_type=source.image_type,
    )
