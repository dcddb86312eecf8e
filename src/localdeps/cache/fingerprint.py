# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Cheap change-detection tokens derived from manifest file metadata."""

from __future__ import annotations

from pathlib import Path

from ..constants import MANIFEST_FILE_NAME


def manifest_fingerprint(directory: Path, manifest_name: str = MANIFEST_FILE_NAME) -> str | None:
    """Return a token built from the manifest's mtime and size.

    Content is not hashed: a rewrite that keeps the byte size and lands on the
    same mtime yields the same token.

    Args:
        directory: Package directory expected to contain the manifest.
        manifest_name: File name of the manifest inside ``directory``.

    Returns:
        str | None: ``"<mtime>-<size>"`` or ``None`` when the manifest is absent.
    """

    manifest = directory / manifest_name
    try:
        stat = manifest.stat()
    except OSError:
        return None
    if not manifest.is_file():
        return None
    return f"{stat.st_mtime}-{stat.st_size}"


__all__ = ["manifest_fingerprint"]
