"""
tests/test_run_image_ingestion.py

Pytest unit tests for the ingestion CLI exit codes.

The database session and the ingestion service are replaced with fakes, so
nothing connects to PostgreSQL or the registry.
"""

from __future__ import annotations

from contextlib import contextmanager

import pytest

from db.config import DatabaseConfigurationError
from hubcatalog.config import get_ingestion_settings, get_registry_http_settings
from scripts import run_image_ingestion


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_ingestion_settings.cache_clear()
    get_registry_http_settings.cache_clear()
    yield
    get_ingestion_settings.cache_clear()
    get_registry_http_settings.cache_clear()


@contextmanager
def _fake_session():
    yield object()


class _ExplodingService:
    def __init__(self, **kwargs: object) -> None:
        pass

    def run(self, sources: object) -> list:
        raise RuntimeError("sink bug")


class TestExitCodes:
    def test_missing_database_configuration_exits_with_config_error(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        def _unconfigured():
            raise DatabaseConfigurationError("No database URL configured.")

        monkeypatch.setattr(run_image_ingestion, "run_session", _unconfigured)

        assert run_image_ingestion.main(["--namespace", "library"]) == run_image_ingestion.EXIT_CONFIG_ERROR
        assert "Configuration error" in capsys.readouterr().err

    def test_unexpected_runtime_error_is_not_reported_as_config_error(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(run_image_ingestion, "run_session", _fake_session)
        monkeypatch.setattr(run_image_ingestion, "ImageIngestionService", _ExplodingService)

        with pytest.raises(RuntimeError, match="sink bug"):
            run_image_ingestion.main(["--namespace", "library"])

    def test_unknown_namespace_exits_with_config_error(self) -> None:
        assert run_image_ingestion.main(["--namespace", "nope"]) == run_image_ingestion.EXIT_CONFIG_ERROR
