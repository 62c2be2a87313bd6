"""
SQLAlchemy-backed storage implementation for registry records.
"""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hubcatalog.domain.docker_image import DockerImageInput
from hubcatalog.repositories.docker_image_repository import DockerImageRepository
from hubcatalog.storage.base import ImageSink, WriteFailure


class SQLAlchemyImageSink(ImageSink):
    """
    Persist records through the repository, committing one record at a time.
    """

    def __init__(self, *, session: Session) -> None:
        self._session = session
        self._repository = DockerImageRepository(session)

    def upsert(self, record: DockerImageInput) -> bool:
        try:
            inserted = self._repository.insert_ignore(record)
            self._session.commit()
            return inserted
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise WriteFailure(
                f"Failed to write repository {record.namespace}/{record.name}: {exc}"
            ) from exc
