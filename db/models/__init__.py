"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.docker_image import NATURAL_KEY_CONSTRAINT, DockerImage

__all__ = [
    "DockerImage",
    "NATURAL_KEY_CONSTRAINT",
]
