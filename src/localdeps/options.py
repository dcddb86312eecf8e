# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Convert discovered packages into per-product dependency options."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from pathlib import Path

from .models import DependencyOption, DiscoveredPackage, ProductDescriptor, TargetDescriptor


def _is_regular_target(targets: Mapping[str, TargetDescriptor], name: str) -> bool:
    target = targets.get(name)
    return target is None or not target.is_test


def eligible_products(package: DiscoveredPackage) -> list[ProductDescriptor]:
    """Return products backed by at least one non-test target.

    A target name that matches no declared target counts as non-test; a
    product without target names is never eligible.
    """

    targets = {target.name: target for target in package.targets}
    return [
        product
        for product in package.products
        if any(_is_regular_target(targets, name) for name in product.target_names)
    ]


def display_path(path: Path, base_path: Path) -> str:
    """Return ``path`` relative to ``base_path`` (``"."`` when identical)."""

    try:
        return os.path.relpath(path, base_path)
    except ValueError:
        # Windows paths on different drives have no relative form.
        return str(path)


def build_options(packages: Iterable[DiscoveredPackage], base_path: Path) -> list[DependencyOption]:
    """Return one option per eligible product, sorted by package then product.

    Args:
        packages: Discovered packages in any order.
        base_path: Directory the display paths are relative to.

    Returns:
        list[DependencyOption]: Deterministically ordered options.
    """

    base = Path(os.path.abspath(base_path))
    options: list[DependencyOption] = []
    for package in packages:
        products = eligible_products(package)
        if not products:
            continue
        available = tuple(sorted({product.name for product in products}))
        shown = display_path(Path(os.path.abspath(package.path)), base)
        options.extend(
            DependencyOption(
                package_name=package.name,
                package_path=package.path,
                product_name=product.name,
                display_path=shown,
                available_products=available,
            )
            for product in products
        )
    options.sort(key=lambda option: (option.package_name, option.product_name))
    return options


__all__ = ["build_options", "display_path", "eligible_products"]
