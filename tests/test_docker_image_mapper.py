"""
tests/test_docker_image_mapper.py

Pytest unit tests for registry item normalization.

All tests are pure Python: no network, no database.

Coverage
--------
- Storage size formatting thresholds
- Category display string and bounded slots
- Source label attachment and timestamp parsing
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from hubcatalog.domain.docker_image import UNCATEGORIZED, ImageType, Source
from hubcatalog.mappers.docker_image_mapper import (
    derive_categories,
    format_storage_size,
    parse_iso_datetime,
    to_docker_image_input,
)


def _item(**overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "name": "nginx",
        "namespace": "library",
        "description": "Official build of Nginx.",
        "pull_count": 1_000_000,
        "star_count": 20_000,
        "is_private": False,
        "last_updated": "2024-05-01T12:34:56.123456Z",
        "media_types": ["application/vnd.oci.image.index.v1+json"],
        "content_types": ["image"],
        "storage_size": 5 * (1 << 20),
        "categories": [{"name": "Web Servers", "slug": "web-servers"}],
    }
    payload.update(overrides)
    return payload


# ---------------------------------------------------------------------------
# Storage size
# ---------------------------------------------------------------------------


class TestFormatStorageSize:
    @pytest.mark.parametrize(
        "size_bytes, expected",
        [
            (0, "0 Bytes"),
            (500, "500 Bytes"),
            (1023, "1023 Bytes"),
            (1024, "1.00 KB"),
            (2048, "2.00 KB"),
            (5 * (1 << 20), "5.00 MB"),
            (3 * (1 << 30), "3.00 GB"),
            (1536, "1.50 KB"),
        ],
    )
    def test_thresholds(self, size_bytes: int, expected: str) -> None:
        assert format_storage_size(size_bytes) == expected

    def test_large_values_stay_in_gigabytes(self) -> None:
        assert format_storage_size(2048 * (1 << 30)) == "2048.00 GB"


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


class TestDeriveCategories:
    def test_zero_categories_is_uncategorized(self) -> None:
        fields = derive_categories([])
        assert fields.display == UNCATEGORIZED
        assert fields.slots == ()

    def test_two_categories_fill_first_two_slots(self) -> None:
        fields = derive_categories(["a", "b"])
        assert fields.display == "a, b"
        assert fields.slots == ("a", "b")

    def test_fifth_category_dropped_from_slots_but_kept_in_display(self) -> None:
        fields = derive_categories(["a", "b", "c", "d", "e"])
        assert fields.display == "a, b, c, d, e"
        assert fields.slots == ("a", "b", "c", "d")


# ---------------------------------------------------------------------------
# Record normalization
# ---------------------------------------------------------------------------


class TestToDockerImageInput:
    def test_attaches_source_label(self) -> None:
        source = Source(namespace="library", image_type=ImageType.OFFICIAL)
        record = to_docker_image_input(_item(), source)

        assert record.image_type == "Docker Official Image"
        assert record.natural_key == ("nginx", "library")
        assert record.storage_size == "5.00 MB"
        assert record.storage_size_bytes == 5 * (1 << 20)
        assert record.category_display == "Web Servers"
        assert record.category_slots == ("Web Servers",)

    def test_null_fields_from_upstream_are_defaulted(self) -> None:
        source = Source(namespace="bitnami", image_type=ImageType.VERIFIED_PUBLISHER)
        record = to_docker_image_input(
            _item(
                description=None,
                media_types=None,
                content_types=None,
                categories=None,
                storage_size=None,
                last_updated=None,
            ),
            source,
        )

        assert record.description == ""
        assert record.media_types == ()
        assert record.content_types == ()
        assert record.storage_size == "0 Bytes"
        assert record.category_display == UNCATEGORIZED
        assert record.category_slots == ()
        assert record.last_updated is None

    def test_last_updated_is_timezone_aware(self) -> None:
        source = Source(namespace="library", image_type=ImageType.OFFICIAL)
        record = to_docker_image_input(_item(), source)

        assert record.last_updated == datetime(2024, 5, 1, 12, 34, 56, 123456, tzinfo=timezone.utc)

    @pytest.mark.parametrize("overrides", [{"name": None}, {"namespace": None}, {"pull_count": "many"}])
    def test_malformed_item_raises_validation_error(self, overrides: dict[str, object]) -> None:
        source = Source(namespace="library", image_type=ImageType.OFFICIAL)

        with pytest.raises(ValidationError):
            to_docker_image_input(_item(**overrides), source)


class TestParseIsoDatetime:
    def test_naive_value_is_treated_as_utc(self) -> None:
        assert parse_iso_datetime("2024-01-02T03:04:05") == datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    def test_garbage_becomes_none(self) -> None:
        assert parse_iso_datetime("yesterday") is None

    def test_empty_becomes_none(self) -> None:
        assert parse_iso_datetime("") is None
