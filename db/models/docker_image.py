"""
db/models/docker_image.py

One registry repository, unique per (name, namespace).
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import BigInteger, Boolean, DateTime, Index, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base

NATURAL_KEY_CONSTRAINT = "uq_docker_images_name_namespace"


class DockerImage(Base):
    __tablename__ = "docker_images"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    namespace: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    pull_count: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    star_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_private: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    last_updated: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    media_types: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        comment="Comma-separated media types",
    )
    content_types: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        comment="Comma-separated content types",
    )
    storage_size: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        comment="Human-readable size, e.g. 12.34 MB",
    )
    categories: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="All category names joined, or Uncategorized",
    )
    category1: Mapped[str | None] = mapped_column(String(120), nullable=True)
    category2: Mapped[str | None] = mapped_column(String(120), nullable=True)
    category3: Mapped[str | None] = mapped_column(String(120), nullable=True)
    category4: Mapped[str | None] = mapped_column(String(120), nullable=True)
    image_type: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="Docker Official Image, Verified Publisher, Sponsored OSS",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    __table_args__ = (
        UniqueConstraint("name", "namespace", name=NATURAL_KEY_CONSTRAINT),
        Index("ix_docker_images_namespace", "namespace"),
        Index("ix_docker_images_image_type", "image_type"),
    )
