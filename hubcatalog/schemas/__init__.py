"""
hubcatalog/schemas package marker.
"""

from hubcatalog.schemas.registry import RegistryCategory, RegistryPageResponse, RegistryRepositoryItem

__all__ = [
    "RegistryCategory",
    "RegistryPageResponse",
    "RegistryRepositoryItem",
]
