"""
hubcatalog/repositories/docker_image_repository.py

Persistence layer for registry repository records.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.dialects.postgresql import Insert, insert
from sqlalchemy.orm import Session

from db.models.docker_image import NATURAL_KEY_CONSTRAINT, DockerImage
from hubcatalog.domain.docker_image import MAX_CATEGORY_SLOTS, DockerImageInput

_LIST_DELIMITER = ", "


def to_row_payload(record: DockerImageInput) -> dict[str, Any]:
    """
    Project a record onto the `docker_images` columns.
    """

    slots = list(record.category_slots) + [None] * (MAX_CATEGORY_SLOTS - len(record.category_slots))
    return {
        "name": record.name,
        "namespace": record.namespace,
        "description": record.description,
        "pull_count": record.pull_count,
        "star_count": record.star_count,
        "is_private": record.is_private,
        "last_updated": record.last_updated,
        "media_types": _LIST_DELIMITER.join(record.media_types),
        "content_types": _LIST_DELIMITER.join(record.content_types),
        "storage_size": record.storage_size,
        "categories": record.category_display,
        "category1": slots[0],
        "category2": slots[1],
        "category3": slots[2],
        "category4": slots[3],
        "image_type": record.image_type,
    }


class DockerImageRepository:
    """
    Insert-or-ignore writes keyed on (name, namespace).
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    @staticmethod
    def build_insert_ignore(record: DockerImageInput) -> Insert:
        return (
            insert(DockerImage)
            .values(to_row_payload(record))
            .on_conflict_do_nothing(constraint=NATURAL_KEY_CONSTRAINT)
            .returning(DockerImage.id)
        )

    def insert_ignore(self, record: DockerImageInput) -> bool:
        """
        Insert one record; return False when the natural key already exists.
        """

        inserted_id = self._session.scalars(self.build_insert_ignore(record)).first()
        return inserted_id is not None
