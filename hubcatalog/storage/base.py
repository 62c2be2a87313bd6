"""
Storage layer interfaces for normalized registry records.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from hubcatalog.domain.docker_image import DockerImageInput


class WriteFailure(RuntimeError):
    """
    Raised when a record cannot be written for a reason other than a key conflict.
    """


class ImageSink(ABC):
    """
    Idempotent write interface for registry records.
    """

    @abstractmethod
    def upsert(self, record: DockerImageInput) -> bool:
        """
        Persist one record and return True if a new row was inserted.

        A record whose (name, namespace) already exists is a silent no-op
        returning False; the existing row is left untouched.
        """
