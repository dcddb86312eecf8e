# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for discovery, caching and selection."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .cache.store import default_cache_dir
from .constants import (
    ALWAYS_EXCLUDE_DIRS,
    DEFAULT_CONCURRENCY,
    DESCRIBE_COMMAND,
    DESCRIBE_TIMEOUT_SECONDS,
    MANIFEST_FILE_NAME,
)


class DiscoveryConfig(BaseModel):
    """How candidate packages are located and described."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    manifest_name: str = MANIFEST_FILE_NAME
    describe_command: list[str] = Field(default_factory=lambda: list(DESCRIBE_COMMAND))
    timeout: float = Field(default=DESCRIBE_TIMEOUT_SECONDS, gt=0)
    concurrency: int = Field(default=DEFAULT_CONCURRENCY, ge=1)
    parallel: bool = True
    exclude_dirs: list[str] = Field(default_factory=lambda: sorted(ALWAYS_EXCLUDE_DIRS))

    @field_validator("describe_command")
    @classmethod
    def _require_command(cls, value: list[str]) -> list[str]:
        if not value or not value[0].strip():
            raise ValueError("describe_command must name an executable")
        return value


class CacheConfig(BaseModel):
    """Location and toggle for the persistent package cache."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    enabled: bool = True
    directory: Path = Field(default_factory=default_cache_dir)

    @field_validator("directory")
    @classmethod
    def _expand_home(cls, value: Path) -> Path:
        return value.expanduser()


class SelectionConfig(BaseModel):
    """Filtering applied to dependency options before they are offered."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    exclusions: list[str] = Field(default_factory=list)


class OutputConfig(BaseModel):
    """Console presentation preferences."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    verbose: bool = False
    emoji: bool = True
    color: bool = True


class Config(BaseModel):
    """Primary configuration container."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    selection: SelectionConfig = Field(default_factory=SelectionConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-compatible representation."""

        return dict(self.model_dump(mode="json"))


__all__ = ["CacheConfig", "Config", "DiscoveryConfig", "OutputConfig", "SelectionConfig"]
