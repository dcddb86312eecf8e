# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""File-backed cache of described packages keyed by directory path."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Mapping
from datetime import datetime, timezone
from pathlib import Path
from threading import Lock
from types import MappingProxyType
from typing import Final

from pydantic import ValidationError

from ..constants import CACHE_DIR_NAME, CACHE_FILE_NAME, MANIFEST_FILE_NAME
from ..logging import warn
from ..models import CacheEntry, DiscoveredPackage
from .fingerprint import manifest_fingerprint

LOGGER = logging.getLogger(__name__)

JSON_INDENT: Final[int] = 2


def default_cache_dir() -> Path:
    """Return the per-user cache directory (``~/.localdeps``)."""

    return Path.home() / CACHE_DIR_NAME


def _cache_key(path: Path) -> str:
    return str(path)


class PackageCache:
    """Path-keyed map of package metadata persisted to a single JSON file.

    The map is read once at construction and pruned of directories that no
    longer exist. Every :meth:`store` rewrites the whole file, so a crash loses
    at most the entry being written. Lookups and stores are serialised by a
    lock; the describe invocation that produces the stored data never runs
    under it.
    """

    def __init__(
        self,
        directory: Path | None = None,
        *,
        manifest_name: str = MANIFEST_FILE_NAME,
        use_emoji: bool = True,
    ) -> None:
        """Open the cache rooted at ``directory`` and load persisted entries.

        Args:
            directory: Directory holding the cache file; defaults to
                :func:`default_cache_dir`.
            manifest_name: Manifest file name used to fingerprint packages.
            use_emoji: Whether warnings may include emoji glyphs.
        """

        self._dir = directory if directory is not None else default_cache_dir()
        self._file = self._dir / CACHE_FILE_NAME
        self._manifest_name = manifest_name
        self._use_emoji = use_emoji
        self._entries: dict[str, CacheEntry] = {}
        self._lock = Lock()
        self._flush_lock = Lock()
        self.load()

    @property
    def path(self) -> Path:
        """Return the location of the persisted cache file."""

        return self._file

    @property
    def entries(self) -> Mapping[str, CacheEntry]:
        """Return a read-only snapshot of the cached entries."""

        with self._lock:
            return MappingProxyType(dict(self._entries))

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def load(self) -> None:
        """Replace the in-memory map with the persisted one, dropping stale entries.

        A missing, empty or unparsable file yields an empty cache. Entries that
        fail validation are discarded individually.
        """

        entries = self._read_entries()
        pruned = {key: entry for key, entry in entries.items() if entry.path.exists()}
        if len(pruned) != len(entries):
            LOGGER.debug("pruned %d stale cache entries", len(entries) - len(pruned))
        with self._lock:
            self._entries = pruned

    def lookup(self, path: Path) -> DiscoveredPackage | None:
        """Return the cached package for ``path`` when its manifest is unchanged.

        Args:
            path: Package directory to resolve.

        Returns:
            DiscoveredPackage | None: Cached package, or ``None`` on a miss.
        """

        fingerprint = manifest_fingerprint(path, self._manifest_name)
        if fingerprint is None:
            return None
        with self._lock:
            entry = self._entries.get(_cache_key(path))
        if entry is None or entry.fingerprint != fingerprint:
            return None
        return entry.to_package()

    def store(self, package: DiscoveredPackage, path: Path) -> None:
        """Record ``package`` for ``path`` and persist the full map.

        Nothing is stored when the manifest has vanished. Disk errors are
        reported as a warning; the in-memory entry is kept regardless.

        Args:
            package: Freshly described package metadata.
            path: Package directory the metadata belongs to.
        """

        fingerprint = manifest_fingerprint(path, self._manifest_name)
        if fingerprint is None:
            return
        entry = CacheEntry(
            name=package.name,
            path=package.path,
            products=package.products,
            targets=package.targets,
            fingerprint=fingerprint,
            last_written=datetime.now(timezone.utc),
        )
        with self._lock:
            self._entries[_cache_key(path)] = entry
        self._flush()

    def clear(self) -> None:
        """Empty the cache and delete the persisted file."""

        with self._lock:
            self._entries.clear()
        with self._flush_lock:
            self._file.unlink(missing_ok=True)

    def _read_entries(self) -> dict[str, CacheEntry]:
        try:
            raw = json.loads(self._file.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            LOGGER.debug("ignoring unreadable package cache %s: %s", self._file, exc)
            return {}
        if not isinstance(raw, dict):
            LOGGER.debug("ignoring package cache %s: top level is not an object", self._file)
            return {}
        entries: dict[str, CacheEntry] = {}
        for key, payload in raw.items():
            try:
                entries[str(key)] = CacheEntry.model_validate(payload)
            except ValidationError:
                LOGGER.debug("dropping malformed cache entry for %s", key)
        return entries

    def _flush(self) -> None:
        # Snapshot inside the flush lock; the last write always holds the newest map.
        with self._flush_lock:
            with self._lock:
                entries = dict(self._entries)
            payload = {key: entry.model_dump(mode="json", by_alias=True) for key, entry in entries.items()}
            try:
                self._dir.mkdir(parents=True, exist_ok=True)
                fd, tmp_name = tempfile.mkstemp(dir=self._dir, prefix=".package-cache-", suffix=".tmp")
                try:
                    with os.fdopen(fd, "w", encoding="utf-8") as handle:
                        json.dump(payload, handle, indent=JSON_INDENT)
                    os.replace(tmp_name, self._file)
                except BaseException:
                    Path(tmp_name).unlink(missing_ok=True)
                    raise
            except OSError as exc:
                warn(f"Failed to save package cache: {exc}", use_emoji=self._use_emoji)


__all__ = ["PackageCache", "default_cache_dir"]
