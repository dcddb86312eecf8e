# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Persistent package metadata cache."""

from __future__ import annotations

from .fingerprint import manifest_fingerprint
from .store import PackageCache, default_cache_dir

__all__ = ["PackageCache", "default_cache_dir", "manifest_fingerprint"]
