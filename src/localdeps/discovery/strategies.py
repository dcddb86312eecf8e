# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Execution strategies resolving candidate directories to packages."""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from ..constants import DEFAULT_CONCURRENCY
from ..errors import DescribeError
from ..models import DiscoveredPackage


@dataclass(frozen=True, slots=True)
class CandidateOutcome:
    """Result of resolving a single candidate directory."""

    directory: Path
    package: DiscoveredPackage | None
    from_cache: bool = False
    error: DescribeError | None = None


@runtime_checkable
class CandidateResolver(Protocol):
    """Cache lookup and describe steps applied to each candidate."""

    def cached(self, directory: Path) -> DiscoveredPackage | None:
        """Return the cached package for ``directory`` or ``None`` on a miss."""

        raise NotImplementedError

    def describe(self, directory: Path) -> CandidateOutcome:
        """Describe ``directory`` and store the result; never raises ``DescribeError``."""

        raise NotImplementedError


@runtime_checkable
class DiscoveryStrategy(Protocol):
    """Strategy deciding how cache misses are scheduled."""

    @property
    def identifier(self) -> str:
        """Return a short name for diagnostics."""

        raise NotImplementedError

    def run(self, candidates: Sequence[Path], resolver: CandidateResolver) -> list[CandidateOutcome]:
        """Resolve every candidate, returning outcomes in no particular order."""

        raise NotImplementedError


class SequentialStrategy:
    """Resolve candidates one at a time on the calling thread."""

    @property
    def identifier(self) -> str:
        return "sequential"

    def run(self, candidates: Sequence[Path], resolver: CandidateResolver) -> list[CandidateOutcome]:
        """Look up then describe each candidate in turn.

        Args:
            candidates: Directories to resolve.
            resolver: Cache and describe steps.

        Returns:
            list[CandidateOutcome]: One outcome per candidate.
        """

        outcomes: list[CandidateOutcome] = []
        for directory in candidates:
            package = resolver.cached(directory)
            if package is not None:
                outcomes.append(CandidateOutcome(directory=directory, package=package, from_cache=True))
                continue
            outcomes.append(resolver.describe(directory))
        return outcomes


class ConcurrentStrategy:
    """Describe cache misses on a bounded thread pool.

    Cache hits are resolved on the calling thread before any work is
    submitted, so they never occupy a worker slot. At most ``max_workers``
    describe invocations are in flight at once. Outcomes are gathered by the
    calling thread as futures complete.
    """

    def __init__(self, max_workers: int = DEFAULT_CONCURRENCY) -> None:
        """Create a strategy capped at ``max_workers`` concurrent describes.

        Args:
            max_workers: Maximum simultaneous describe invocations.

        Raises:
            ValueError: If ``max_workers`` is smaller than one.
        """

        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.max_workers = max_workers

    @property
    def identifier(self) -> str:
        return "concurrent"

    def run(self, candidates: Sequence[Path], resolver: CandidateResolver) -> list[CandidateOutcome]:
        """Resolve hits inline, then fan misses out to the pool and join.

        Args:
            candidates: Directories to resolve.
            resolver: Cache and describe steps.

        Returns:
            list[CandidateOutcome]: One outcome per candidate, unordered.
        """

        outcomes: list[CandidateOutcome] = []
        misses: list[Path] = []
        for directory in candidates:
            package = resolver.cached(directory)
            if package is None:
                misses.append(directory)
                continue
            outcomes.append(CandidateOutcome(directory=directory, package=package, from_cache=True))

        if not misses:
            return outcomes

        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(misses))) as executor:
            future_map = {executor.submit(resolver.describe, directory): directory for directory in misses}
            for future in as_completed(future_map):
                outcomes.append(future.result())
        return outcomes


def build_strategy(*, parallel: bool, concurrency: int = DEFAULT_CONCURRENCY) -> DiscoveryStrategy:
    """Return the concurrent strategy, or the sequential one when ``parallel`` is off."""

    if parallel:
        return ConcurrentStrategy(max_workers=concurrency)
    return SequentialStrategy()


__all__ = [
    "CandidateOutcome",
    "CandidateResolver",
    "ConcurrentStrategy",
    "DiscoveryStrategy",
    "SequentialStrategy",
    "build_strategy",
]
