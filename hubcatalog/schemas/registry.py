"""
hubcatalog/schemas/registry.py

Wire schemas for the registry repository listing API.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RegistryCategory(BaseModel):
    """
    One category attached to a repository.
    """

    model_config = ConfigDict(extra="ignore")

    name: str
    slug: str | None = None


class RegistryRepositoryItem(BaseModel):
    """
    One entry of the `results` array.
    """

    model_config = ConfigDict(extra="ignore")

    name: str
    namespace: str
    description: str = ""
    pull_count: int = 0
    star_count: int = 0
    is_private: bool = False
    last_updated: str | None = None
    media_types: list[str] = Field(default_factory=list)
    content_types: list[str] = Field(default_factory=list)
    storage_size: int = 0
    categories: list[RegistryCategory] = Field(default_factory=list)

    @field_validator("description", mode="before")
    @classmethod
    def _null_description(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("pull_count", "star_count", "storage_size", mode="before")
    @classmethod
    def _null_count(cls, value: object) -> object:
        return 0 if value is None else value

    @field_validator("media_types", "content_types", "categories", mode="before")
    @classmethod
    def _null_list(cls, value: object) -> object:
        return [] if value is None else value


class RegistryPageResponse(BaseModel):
    """
    Response body of `GET <base>/<namespace>/`.

    Items stay raw here and are validated one at a time during ingestion, so
    a single malformed entry does not reject the whole page.
    """

    model_config = ConfigDict(extra="ignore")

    count: int = 0
    next: str | None = None
    results: list[dict[str, Any]] = Field(default_factory=list)

    @field_validator("results", mode="before")
    @classmethod
    def _null_results(cls, value: object) -> object:
        return [] if value is None else value
