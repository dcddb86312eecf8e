# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Filesystem walk locating manifest-bearing directories."""

from __future__ import annotations

import os
from collections.abc import Collection
from pathlib import Path

from ..constants import ALWAYS_EXCLUDE_DIRS, MANIFEST_FILE_NAME


def find_candidates(
    root: Path,
    *,
    manifest_name: str = MANIFEST_FILE_NAME,
    exclude_dirs: Collection[str] = ALWAYS_EXCLUDE_DIRS,
) -> list[Path]:
    """Return every directory under ``root`` that contains a manifest.

    Nested packages are legal, so a matching directory is still descended
    into. Directories named in ``exclude_dirs`` are pruned without being
    visited. Symlinked directories are not followed and unreadable
    directories are skipped.

    Args:
        root: Workspace directory to walk; included when it holds a manifest.
        manifest_name: File name identifying a package directory.
        exclude_dirs: Directory names never descended into.

    Returns:
        list[Path]: Absolute candidate directories in walk order.
    """

    base = root.resolve()
    excluded = frozenset(exclude_dirs)
    candidates: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(base, followlinks=False):
        dirnames[:] = sorted(name for name in dirnames if name not in excluded)
        if manifest_name in filenames:
            candidates.append(Path(dirpath))
    return candidates


__all__ = ["find_candidates"]
