# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core constants shared across discovery, caching and selection."""

from __future__ import annotations

from typing import Final

MANIFEST_FILE_NAME: Final[str] = "Package.swift"

DESCRIBE_COMMAND: Final[tuple[str, ...]] = ("swift", "package", "describe", "--type", "json")
DESCRIBE_TIMEOUT_SECONDS: Final[float] = 30.0
DEFAULT_CONCURRENCY: Final[int] = 6

ALWAYS_EXCLUDE_DIRS: Final[frozenset[str]] = frozenset(
    {
        ".git",
        ".build",
        "DerivedData",
        ".swiftpm",
        "build",
        "Pods",
        "node_modules",
        ".vscode",
        ".idea",
    },
)

CACHE_DIR_NAME: Final[str] = ".localdeps"
CACHE_FILE_NAME: Final[str] = "package-cache.json"
CONFIG_FILE_NAME: Final[str] = ".localdeps.toml"

TEST_TARGET_KIND: Final[str] = "test"
INTERFACE_SUFFIX: Final[str] = "Interface"
ALL_INTERFACES_KEYWORD: Final[str] = "interfaces"
WILDCARD: Final[str] = "*"

__all__ = [
    "ALL_INTERFACES_KEYWORD",
    "ALWAYS_EXCLUDE_DIRS",
    "CACHE_DIR_NAME",
    "CACHE_FILE_NAME",
    "CONFIG_FILE_NAME",
    "DEFAULT_CONCURRENCY",
    "DESCRIBE_COMMAND",
    "DESCRIBE_TIMEOUT_SECONDS",
    "INTERFACE_SUFFIX",
    "MANIFEST_FILE_NAME",
    "TEST_TARGET_KIND",
    "WILDCARD",
]
