"""create docker_images table

Revision ID: 20261018_0001
Revises:
Create Date: 2026-10-18 09:00:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "20261018_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "docker_images",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("namespace", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("pull_count", sa.BigInteger(), nullable=False),
        sa.Column("star_count", sa.Integer(), nullable=False),
        sa.Column("is_private", sa.Boolean(), nullable=False),
        sa.Column("last_updated", sa.DateTime(timezone=True), nullable=True),
        sa.Column("media_types", sa.Text(), nullable=False, comment="Comma-separated media types"),
        sa.Column("content_types", sa.Text(), nullable=False, comment="Comma-separated content types"),
        sa.Column("storage_size", sa.String(length=32), nullable=False, comment="Human-readable size, e.g. 12.34 MB"),
        sa.Column("categories", sa.Text(), nullable=False, comment="All category names joined, or Uncategorized"),
        sa.Column("category1", sa.String(length=120), nullable=True),
        sa.Column("category2", sa.String(length=120), nullable=True),
        sa.Column("category3", sa.String(length=120), nullable=True),
        sa.Column("category4", sa.String(length=120), nullable=True),
        sa.Column(
            "image_type",
            sa.String(length=64),
            nullable=False,
            comment="Docker Official Image, Verified Publisher, Sponsored OSS",
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", "namespace", name="uq_docker_images_name_namespace"),
    )
    op.create_index("ix_docker_images_namespace", "docker_images", ["namespace"], unique=False)
    op.create_index("ix_docker_images_image_type", "docker_images", ["image_type"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_docker_images_image_type", table_name="docker_images")
    op.drop_index("ix_docker_images_namespace", table_name="docker_images")
    op.drop_table("docker_images")
