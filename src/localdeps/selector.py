# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Facade composing discovery, option building, exclusion and ordering."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .config import Config
from .discovery import DiscoveryReport, PackageDiscovery
from .exclusions import ExclusionResult, filter_excluded, normalise_patterns
from .models import DependencyOption, DependencySelection, DiscoveredPackage
from .options import build_options
from .selection import group_selections, interface_count, order_options, resolve_selection


@dataclass(frozen=True, slots=True)
class OptionListing:
    """Ordered options ready for display, with the filtering that produced them."""

    options: list[DependencyOption] = field(default_factory=list)
    exclusion: ExclusionResult = field(default_factory=ExclusionResult)
    report: DiscoveryReport | None = None

    @property
    def interface_count(self) -> int:
        """Return how many leading options are interface-style products."""

        return interface_count(self.options)


class DependencySelector:
    """Turn discovered packages into an ordered, filtered list of choices."""

    def __init__(
        self,
        *,
        exclusions: Iterable[str] = (),
        discovery: PackageDiscovery | None = None,
    ) -> None:
        """Create a selector.

        Args:
            exclusions: Package exclusion patterns.
            discovery: Discovery service used by :meth:`discover_options`.
        """

        self._exclusions = normalise_patterns(exclusions)
        self._discovery = discovery

    @classmethod
    def from_config(cls, config: Config, *, discovery: PackageDiscovery | None = None) -> DependencySelector:
        """Build a selector using ``config.selection.exclusions``."""

        if discovery is None:
            discovery = PackageDiscovery.from_config(config)
        return cls(exclusions=config.selection.exclusions, discovery=discovery)

    @property
    def exclusions(self) -> tuple[str, ...]:
        """Return the active exclusion patterns."""

        return self._exclusions

    def ordered_options(self, packages: Iterable[DiscoveredPackage], base_path: Path) -> OptionListing:
        """Build, filter and order options for already-discovered ``packages``.

        Args:
            packages: Packages in any order.
            base_path: Directory display paths are relative to.

        Returns:
            OptionListing: Interface products first, each group sorted by
            package then product.
        """

        exclusion = filter_excluded(build_options(packages, base_path), self._exclusions)
        return OptionListing(options=order_options(exclusion.options), exclusion=exclusion)

    def discover_options(self, root: Path) -> OptionListing:
        """Discover packages beneath ``root`` and return their ordered options.

        Raises:
            RuntimeError: If the selector was built without a discovery service.
        """

        if self._discovery is None:
            raise RuntimeError("DependencySelector requires a PackageDiscovery to discover options")
        report = self._discovery.discover_with_report(root)
        listing = self.ordered_options(report.packages, root.resolve())
        return OptionListing(options=listing.options, exclusion=listing.exclusion, report=report)

    def select(self, raw: str, ordered: Sequence[DependencyOption]) -> list[DependencySelection]:
        """Resolve ``raw`` against ``ordered`` and group the chosen options."""

        return group_selections(resolve_selection(raw, ordered))


__all__ = ["DependencySelector", "OptionListing"]
