# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Data models shared by discovery, caching and dependency selection."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .constants import TEST_TARGET_KIND


class ProductDescriptor(BaseModel):
    """Product declared by a package manifest and the targets backing it."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    target_names: tuple[str, ...] = Field(alias="targets")


class TargetDescriptor(BaseModel):
    """Target declared by a package manifest.

    ``kind`` mirrors the describe output's ``type`` key (``"regular"``,
    ``"test"``, ``"executable"`` ...). A missing kind is treated as non-test.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    kind: str | None = Field(default=None, alias="type")

    @property
    def is_test(self) -> bool:
        """Return whether the target only exists to run tests."""

        return self.kind is not None and self.kind.lower() == TEST_TARGET_KIND


class PackageManifest(BaseModel):
    """Decoded payload emitted by the external describe tool.

    Keys beyond ``name``, ``products`` and ``targets`` are ignored.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    products: tuple[ProductDescriptor, ...]
    targets: tuple[TargetDescriptor, ...]


class DiscoveredPackage(BaseModel):
    """Package metadata resolved for one directory during a discovery run."""

    model_config = ConfigDict(frozen=True)

    name: str
    path: Path
    products: tuple[ProductDescriptor, ...] = ()
    targets: tuple[TargetDescriptor, ...] = ()

    @classmethod
    def from_manifest(cls, manifest: PackageManifest, directory: Path) -> DiscoveredPackage:
        """Return a package built from ``manifest`` located at ``directory``."""

        return cls(
            name=manifest.name,
            path=directory,
            products=manifest.products,
            targets=manifest.targets,
        )


class CacheEntry(DiscoveredPackage):
    """Persisted package metadata plus the fingerprint that produced it."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    fingerprint: str
    last_written: datetime = Field(alias="lastWritten")

    def to_package(self) -> DiscoveredPackage:
        """Return the :class:`DiscoveredPackage` view of this entry."""

        return DiscoveredPackage(
            name=self.name,
            path=self.path,
            products=self.products,
            targets=self.targets,
        )


@dataclass(frozen=True, slots=True)
class DependencyOption:
    """Selectable ``(package, product)`` pair surfaced to a chooser."""

    package_name: str
    package_path: Path
    product_name: str
    display_path: str
    available_products: tuple[str, ...] = ()

    @property
    def label(self) -> str:
        """Return the ``package/product`` label used in summaries."""

        return f"{self.package_name}/{self.product_name}"


@dataclass(slots=True)
class DependencySelection:
    """Chosen products grouped under the package that provides them."""

    package_name: str
    package_path: Path
    product_names: list[str] = field(default_factory=list)
    available_products: tuple[str, ...] = ()

    def add_product(self, product_name: str) -> None:
        """Append ``product_name`` unless it was already selected."""

        if product_name not in self.product_names:
            self.product_names.append(product_name)

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-serialisable representation."""

        return {
            "packageName": self.package_name,
            "packagePath": str(self.package_path),
            "productNames": list(self.product_names),
            "availableProducts": list(self.available_products),
        }


__all__ = [
    "CacheEntry",
    "DependencyOption",
    "DependencySelection",
    "DiscoveredPackage",
    "PackageManifest",
    "ProductDescriptor",
    "TargetDescriptor",
]
