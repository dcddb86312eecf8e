# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Discovery of local packages with caching and per-directory fault isolation."""

from __future__ import annotations

import logging
from collections.abc import Callable, Collection
from dataclasses import dataclass, field
from pathlib import Path

from ..cache import PackageCache
from ..config import Config
from ..constants import ALWAYS_EXCLUDE_DIRS, MANIFEST_FILE_NAME
from ..errors import DescribeError
from ..logging import warn
from ..models import DiscoveredPackage
from .describer import DescribeRunner, PackageDescriber
from .strategies import CandidateOutcome, DiscoveryStrategy, SequentialStrategy, build_strategy
from .walker import find_candidates

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class DiscoveryReport:
    """Packages found by a discovery run plus diagnostic counters."""

    packages: list[DiscoveredPackage] = field(default_factory=list)
    candidates: int = 0
    cache_hits: int = 0
    described: int = 0
    skipped: list[DescribeError] = field(default_factory=list)
    tool_available: bool = True

    def record(self, outcome: CandidateOutcome) -> None:
        """Fold a single candidate outcome into the report."""

        if outcome.error is not None:
            self.skipped.append(outcome.error)
        if outcome.package is None:
            return
        self.packages.append(outcome.package)
        if outcome.from_cache:
            self.cache_hits += 1
        else:
            self.described += 1


@dataclass(slots=True)
class _CandidateResolver:
    """Cache lookup plus describe-and-store for a single directory."""

    describer: PackageDescriber
    cache: PackageCache | None
    use_emoji: bool

    def cached(self, directory: Path) -> DiscoveredPackage | None:
        if self.cache is None:
            return None
        return self.cache.lookup(directory)

    def describe(self, directory: Path) -> CandidateOutcome:
        try:
            package = self.describer.describe(directory)
        except DescribeError as exc:
            warn(f"Could not inspect package at {directory}: {exc.reason}", use_emoji=self.use_emoji)
            return CandidateOutcome(directory=directory, package=None, error=exc)
        if self.cache is not None:
            self.cache.store(package, directory)
        return CandidateOutcome(directory=directory, package=package)


class PackageDiscovery:
    """Locate packages beneath a workspace root and describe them.

    Only a missing describe tool short-circuits a run. Every other failure is
    confined to the directory that caused it.
    """

    def __init__(
        self,
        describer: PackageDescriber,
        *,
        cache: PackageCache | None = None,
        strategy: DiscoveryStrategy | None = None,
        manifest_name: str = MANIFEST_FILE_NAME,
        exclude_dirs: Collection[str] = ALWAYS_EXCLUDE_DIRS,
        use_emoji: bool = True,
    ) -> None:
        """Wire the describer, cache and scheduling strategy.

        Args:
            describer: Runs the external describe tool.
            cache: Persistent cache consulted before describing; ``None``
                disables caching.
            strategy: Scheduling strategy; defaults to sequential.
            manifest_name: Manifest file name identifying packages.
            exclude_dirs: Directory names skipped during the walk.
            use_emoji: Whether warnings may include emoji glyphs.
        """

        self._describer = describer
        self._cache = cache
        self._strategy: DiscoveryStrategy = strategy if strategy is not None else SequentialStrategy()
        self._manifest_name = manifest_name
        self._exclude_dirs = frozenset(exclude_dirs)
        self._use_emoji = use_emoji

    @classmethod
    def from_config(
        cls,
        config: Config,
        *,
        runner: DescribeRunner | None = None,
        locator: Callable[[str], str | None] | None = None,
        cache: PackageCache | None = None,
    ) -> PackageDiscovery:
        """Build a discovery service from ``config``.

        Args:
            config: Loaded configuration.
            runner: Optional replacement for the subprocess runner.
            locator: Optional replacement for the executable lookup.
            cache: Pre-built cache; when omitted one is opened if enabled.

        Returns:
            PackageDiscovery: Configured service.
        """

        discovery_cfg = config.discovery
        describer = PackageDescriber(
            discovery_cfg.describe_command,
            timeout=discovery_cfg.timeout,
            runner=runner,
            locator=locator,
        )
        if cache is None and config.cache.enabled:
            cache = PackageCache(
                config.cache.directory,
                manifest_name=discovery_cfg.manifest_name,
                use_emoji=config.output.emoji,
            )
        return cls(
            describer,
            cache=cache,
            strategy=build_strategy(parallel=discovery_cfg.parallel, concurrency=discovery_cfg.concurrency),
            manifest_name=discovery_cfg.manifest_name,
            exclude_dirs=discovery_cfg.exclude_dirs,
            use_emoji=config.output.emoji,
        )

    @property
    def strategy(self) -> DiscoveryStrategy:
        """Return the scheduling strategy in use."""

        return self._strategy

    def discover(self, root: Path) -> list[DiscoveredPackage]:
        """Return packages beneath ``root``, excluding ``root`` itself.

        The order of the returned list is unspecified.
        """

        return self.discover_with_report(root).packages

    def discover_with_report(self, root: Path) -> DiscoveryReport:
        """Discover packages beneath ``root`` and report how each was resolved.

        Args:
            root: Workspace directory to search.

        Returns:
            DiscoveryReport: Packages plus cache/describe/skip counters.
        """

        report = DiscoveryReport()
        if not self._describer.is_available():
            warn(
                f"'{self._describer.command[0]}' not found. Skipping dependency discovery.",
                use_emoji=self._use_emoji,
            )
            report.tool_available = False
            return report

        base = root.resolve()
        candidates = [
            candidate
            for candidate in find_candidates(base, manifest_name=self._manifest_name, exclude_dirs=self._exclude_dirs)
            if candidate != base
        ]
        report.candidates = len(candidates)
        LOGGER.debug(
            "discovering %d candidates under %s strategy=%s",
            len(candidates),
            base,
            self._strategy.identifier,
        )
        resolver = _CandidateResolver(describer=self._describer, cache=self._cache, use_emoji=self._use_emoji)
        for outcome in self._strategy.run(candidates, resolver):
            report.record(outcome)
        LOGGER.debug(
            "discovered %d packages cache_hits=%d described=%d skipped=%d",
            len(report.packages),
            report.cache_hits,
            report.described,
            len(report.skipped),
        )
        return report


__all__ = ["DiscoveryReport", "PackageDiscovery"]
