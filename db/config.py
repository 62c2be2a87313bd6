"""
Shared environment-driven database configuration helpers.
"""

from __future__ import annotations

import os
from pathlib import Path
from urllib.parse import quote


class DatabaseConfigurationError(RuntimeError):
    """
    Raised when no usable PostgreSQL connection URL can be resolved.
    """


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    project_root = Path(__file__).resolve().parents[1]
    for filename in (".env", ".env.local"):
        env_path = project_root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


def normalize_postgres_url(url: str) -> str:
    """
    Normalize postgres URLs to SQLAlchemy's recommended psycopg driver form.
    """

    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url


def build_postgres_url(
    *,
    host: str,
    port: int,
    user: str,
    password: str,
    dbname: str,
) -> str:
    """
    Assemble a postgres URL from discrete connection parameters.
    """

    credentials = quote(user, safe="")
    if password:
        credentials = f"{credentials}:{quote(password, safe='')}"
    return f"postgres://{credentials}@{host}:{port}/{dbname}?sslmode=disable"


def _url_from_components() -> str | None:
    host = os.getenv("DB_HOST", "").strip()
    if not host:
        return None

    raw_port = os.getenv("DB_PORT", "5432").strip()
    try:
        port = int(raw_port)
    except ValueError as exc:
        raise DatabaseConfigurationError(f"DB_PORT must be an integer, got '{raw_port}'.") from exc

    return build_postgres_url(
        host=host,
        port=port,
        user=os.getenv("DB_USER", "postgres").strip(),
        password=os.getenv("DB_PASSWORD", ""),
        dbname=os.getenv("DB_NAME", "").strip(),
    )


def resolve_database_url() -> str:
    """
    Resolve database URL using environment variables and optional .env files.

    Priority:
    1) DATABASE_URL
    2) CLOUD_DATABASE_URL when ENVIRONMENT is cloud-like
    3) LOCAL_DATABASE_URL
    4) DB_HOST / DB_PORT / DB_USER / DB_PASSWORD / DB_NAME
    """

    load_env_files()

    direct_url = os.getenv("DATABASE_URL")
    if direct_url:
        return normalize_postgres_url(direct_url)

    environment = os.getenv("ENVIRONMENT", "local").strip().lower()
    cloud_like_envs = {"prod", "production", "staging", "cloud"}

    cloud_url = os.getenv("CLOUD_DATABASE_URL")
    if environment in cloud_like_envs and cloud_url:
        return normalize_postgres_url(cloud_url)

    local_url = os.getenv("LOCAL_DATABASE_URL")
    if local_url:
        return normalize_postgres_url(local_url)

    component_url = _url_from_components()
    if component_url:
        return normalize_postgres_url(component_url)

    raise DatabaseConfigurationError(
        "No database URL configured. Set DATABASE_URL, configure "
        "LOCAL_DATABASE_URL / CLOUD_DATABASE_URL, or set DB_HOST and friends."
    )
