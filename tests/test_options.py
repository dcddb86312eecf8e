# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for turning discovered packages into dependency options."""

from __future__ import annotations

from pathlib import Path

from localdeps.models import DiscoveredPackage, ProductDescriptor, TargetDescriptor
from localdeps.options import build_options, display_path, eligible_products


def _package(
    name: str,
    path: Path,
    products: dict[str, tuple[str, ...]],
    targets: dict[str, str | None],
) -> DiscoveredPackage:
    return DiscoveredPackage(
        name=name,
        path=path,
        products=tuple(ProductDescriptor(name=product, target_names=names) for product, names in products.items()),
        targets=tuple(TargetDescriptor(name=target, kind=kind) for target, kind in targets.items()),
    )


def test_test_only_package_yields_no_options(tmp_path: Path) -> None:
    package = _package(
        "Fixtures",
        tmp_path / "Fixtures",
        {"FixturesTests": ("FixturesTests",)},
        {"FixturesTests": "test"},
    )

    assert build_options([package], tmp_path) == []


def test_mixed_product_is_eligible(tmp_path: Path) -> None:
    package = _package(
        "Core",
        tmp_path / "Core",
        {"Core": ("Core", "CoreTests")},
        {"Core": "regular", "CoreTests": "test"},
    )

    options = build_options([package], tmp_path)

    assert [(option.package_name, option.product_name) for option in options] == [("Core", "Core")]
    assert options[0].display_path == "Core"
    assert options[0].available_products == ("Core",)


def test_test_kind_is_case_insensitive(tmp_path: Path) -> None:
    package = _package("Kit", tmp_path, {"KitTests": ("KitTests",)}, {"KitTests": "TEST"})

    assert eligible_products(package) == []


def test_unknown_target_name_counts_as_regular(tmp_path: Path) -> None:
    package = _package("Kit", tmp_path, {"Kit": ("Generated",)}, {"KitTests": "test"})

    assert [product.name for product in eligible_products(package)] == ["Kit"]


def test_product_without_targets_is_ineligible(tmp_path: Path) -> None:
    package = _package("Kit", tmp_path, {"Empty": (), "Kit": ("Kit",)}, {"Kit": "executable"})

    assert [product.name for product in eligible_products(package)] == ["Kit"]


def test_options_sorted_by_package_then_product(tmp_path: Path) -> None:
    zeta = _package("Zeta", tmp_path / "Zeta", {"ZetaB": ("Zeta",), "ZetaA": ("Zeta",)}, {"Zeta": "regular"})
    alpha = _package(
        "Alpha",
        tmp_path / "Alpha",
        {"AlphaTesting": ("AlphaTests",), "Alpha": ("Alpha",), "AlphaInterface": ("AlphaInterface",)},
        {"Alpha": "regular", "AlphaInterface": "regular", "AlphaTests": "test"},
    )

    options = build_options([zeta, alpha], tmp_path)

    assert [option.label for option in options] == [
        "Alpha/Alpha",
        "Alpha/AlphaInterface",
        "Zeta/ZetaA",
        "Zeta/ZetaB",
    ]
    assert options[0].available_products == ("Alpha", "AlphaInterface")
    assert options[2].available_products == ("ZetaA", "ZetaB")
    assert build_options([alpha, zeta], tmp_path) == options


def test_display_path_relative_to_base(tmp_path: Path) -> None:
    assert display_path(tmp_path, tmp_path) == "."
    assert display_path(tmp_path / "a" / "b", tmp_path) == str(Path("a") / "b")
    assert display_path(tmp_path, tmp_path / "nested") == ".."


def test_option_keeps_absolute_package_path(tmp_path: Path) -> None:
    package = _package("Core", tmp_path / "Core", {"Core": ("Core",)}, {"Core": "regular"})

    (option,) = build_options([package], tmp_path / "Core")

    assert option.package_path == tmp_path / "Core"
    assert option.display_path == "."
