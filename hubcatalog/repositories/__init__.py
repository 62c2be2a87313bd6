"""
hubcatalog/repositories package marker.
"""

from hubcatalog.repositories.docker_image_repository import DockerImageRepository, to_row_payload

__all__ = [
    "DockerImageRepository",
    "to_row_payload",
]
