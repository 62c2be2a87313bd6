"""
hubcatalog/services package marker.
"""

from hubcatalog.services.image_ingestion_service import (
    ImageIngestionService,
    PageFetcher,
    SourceIngestionError,
)

__all__ = [
    "ImageIngestionService",
    "PageFetcher",
    "SourceIngestionError",
]
