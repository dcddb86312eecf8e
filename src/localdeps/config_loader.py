# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Layered TOML configuration loading (defaults, global, local)."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .config import Config
from .constants import CONFIG_FILE_NAME
from .errors import ConfigError


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def read_toml(path: Path) -> dict[str, Any]:
    """Return the TOML table stored at ``path`` or ``{}`` when it is absent.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """

    if not path.is_file():
        return {}
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Could not read configuration at {path}: {exc}") from exc


@dataclass(slots=True)
class ConfigLoadResult:
    """Loaded configuration plus the files that contributed to it."""

    config: Config
    sources: list[Path] = field(default_factory=list)


def config_paths(root: Path, *, home: Path | None = None) -> tuple[Path, Path]:
    """Return the ``(global, local)`` configuration file locations."""

    home_dir = home if home is not None else Path.home()
    return home_dir / CONFIG_FILE_NAME, root / CONFIG_FILE_NAME


def load_config(root: Path, *, home: Path | None = None) -> ConfigLoadResult:
    """Load configuration for ``root``; local settings override global ones.

    Args:
        root: Workspace root holding an optional ``.localdeps.toml``.
        home: Directory holding the global ``.localdeps.toml``; defaults to
            the user's home directory.

    Returns:
        ConfigLoadResult: Validated configuration and contributing files.

    Raises:
        ConfigError: If any file is unreadable or fails validation.
    """

    merged: dict[str, Any] = Config().to_dict()
    sources: list[Path] = []
    for path in config_paths(root, home=home):
        fragment = read_toml(path)
        if not fragment:
            continue
        merged = _deep_merge(merged, fragment)
        sources.append(path)
    try:
        config = Config.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    return ConfigLoadResult(config=config, sources=sources)


__all__ = ["ConfigLoadResult", "config_paths", "load_config", "read_toml"]
