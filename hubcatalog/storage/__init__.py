"""
Storage layer exports.
"""

from hubcatalog.storage.base import ImageSink, WriteFailure
from hubcatalog.storage.sqlalchemy_storage import SQLAlchemyImageSink

__all__ = ["ImageSink", "SQLAlchemyImageSink", "WriteFailure"]
