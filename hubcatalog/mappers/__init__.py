"""
hubcatalog/mappers package marker.
"""

from hubcatalog.mappers.docker_image_mapper import (
    CategoryFields,
    derive_categories,
    format_storage_size,
    parse_iso_datetime,
    to_docker_image_input,
)

__all__ = [
    "CategoryFields",
    "derive_categories",
    "format_storage_size",
    "parse_iso_datetime",
    "to_docker_image_input",
]
