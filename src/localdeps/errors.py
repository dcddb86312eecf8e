# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy for package discovery."""

from __future__ import annotations

from pathlib import Path


class LocaldepsError(Exception):
    """Base class for errors raised by localdeps."""


class ConfigError(LocaldepsError):
    """Raised when configuration input is invalid."""


class DescribeError(LocaldepsError):
    """Raised when a single package directory cannot be described."""

    def __init__(self, directory: Path, reason: str) -> None:
        """Record the offending directory alongside a short reason.

        Args:
            directory: Package directory whose describe invocation failed.
            reason: Human-readable explanation of the failure.
        """

        super().__init__(f"{directory}: {reason}")
        self.directory = directory
        self.reason = reason


__all__ = ["ConfigError", "DescribeError", "LocaldepsError"]
