"""
hubcatalog/domain package marker.
"""

from hubcatalog.domain.docker_image import (
    MAX_CATEGORY_SLOTS,
    UNCATEGORIZED,
    DockerImageInput,
    ImageType,
    RegistryPage,
    Source,
    SourceIngestionSummary,
)

__all__ = [
    "MAX_CATEGORY_SLOTS",
    "UNCATEGORIZED",
    "DockerImageInput",
    "ImageType",
    "RegistryPage",
    "Source",
    "SourceIngestionSummary",
]
