"""
hubcatalog/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files
from hubcatalog.domain.docker_image import ImageType, Source

DEFAULT_REGISTRY_BASE_URL = "https://hub.docker.com/v2/repositories"
DEFAULT_OFFICIAL_NAMESPACE = "library"

DEFAULT_VERIFIED_PUBLISHERS: tuple[str, ...] = (
    "datadog",
    "grafana",
    "bitnami",
    "rancher",
    "amazon",
    "newrelic",
    "google",
    "nginxnc",
    "docker",
    "kong",
    "hashicorp",
    "mirantis",
    "atlassian",
    "jetbrains",
    "cimg",
    "intel",
    "snyk",
    "redhat",
    "ksamweb",
    "circleci",
)

DEFAULT_SPONSORED_OSS: tuple[str, ...] = (
    "fluent",
    "istio",
    "containerrr",
    "envoyproxy",
    "jenkins",
    "linuxserver",
    "fluxcd",
    "apache",
    "pihole",
    "moby",
    "selenium",
    "itzg",
    "alpine",
    "coredns",
    "nodered",
    "localstack",
    "jellyfin",
    "verdaccio",
    "postgis",
    "tautulli",
    "vaultwarden",
    "jupyterhub",
    "requarks",
    "eclipse",
    "gogs",
    "jupyter",
    "paketobuildpacks",
    "crossplane",
    "falcosecurity",
    "kubernetes",
    "projectcontour",
)


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_optional_float_env(name: str) -> float | None:
    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return None
    try:
        return float(raw_value)
    except ValueError:
        return None


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_list_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """
    Read a comma-separated list from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return tuple(token.strip() for token in value.split(",") if token.strip())


def unique_in_order(values: tuple[str, ...]) -> tuple[str, ...]:
    """
    Drop repeated namespaces while preserving first-seen order.
    """

    return tuple(dict.fromkeys(values))


@dataclass(frozen=True)
class RegistryHTTPSettings:
    """
    HTTP behavior settings for the registry fetcher.
    """

    base_url: str = DEFAULT_REGISTRY_BASE_URL
    timeout_seconds: float | None = None
    max_attempts: int = 5
    backoff_seconds: float = 10.0


@dataclass(frozen=True)
class IngestionSettings:
    """
    Runtime settings for one ingestion run.
    """

    official_namespace: str = DEFAULT_OFFICIAL_NAMESPACE
    verified_publishers: tuple[str, ...] = DEFAULT_VERIFIED_PUBLISHERS
    sponsored_oss: tuple[str, ...] = DEFAULT_SPONSORED_OSS
    fail_fast: bool = True

    def sources(self) -> list[Source]:
        """
        Ordered sources for a run: the official root first, then verified
        publishers, then sponsored OSS namespaces.
        """

        sources = [Source(namespace=self.official_namespace, image_type=ImageType.OFFICIAL)]
        sources.extend(
            Source(namespace=namespace, image_type=ImageType.VERIFIED_PUBLISHER)
            for namespace in unique_in_order(self.verified_publishers)
        )
        sources.extend(
            Source(namespace=namespace, image_type=ImageType.SPONSORED_OSS)
            for namespace in unique_in_order(self.sponsored_oss)
        )
        return sources


@lru_cache(maxsize=1)
def get_registry_http_settings() -> RegistryHTTPSettings:
    """
    Return cached registry HTTP settings from environment variables.
    """

    timeout_seconds = _get_optional_float_env("REGISTRY_HTTP_TIMEOUT_SECONDS")
    return RegistryHTTPSettings(
        base_url=_get_str_env("REGISTRY_BASE_URL", DEFAULT_REGISTRY_BASE_URL).rstrip("/"),
        timeout_seconds=max(1.0, timeout_seconds) if timeout_seconds is not None else None,
        max_attempts=max(1, _get_int_env("REGISTRY_MAX_ATTEMPTS", 5)),
        backoff_seconds=max(0.0, _get_float_env("REGISTRY_BACKOFF_SECONDS", 10.0)),
    )


@lru_cache(maxsize=1)
def get_ingestion_settings() -> IngestionSettings:
    """
    Return cached ingestion run settings from environment variables.
    """

    return IngestionSettings(
        official_namespace=_get_str_env("REGISTRY_OFFICIAL_NAMESPACE", DEFAULT_OFFICIAL_NAMESPACE),
        verified_publishers=_get_list_env("REGISTRY_VERIFIED_PUBLISHERS", DEFAULT_VERIFIED_PUBLISHERS),
        sponsored_oss=_get_list_env("REGISTRY_SPONSORED_OSS", DEFAULT_SPONSORED_OSS),
        fail_fast=_get_bool_env("INGEST_FAIL_FAST", True),
    )
