# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for option ordering, selection parsing and grouping."""

from __future__ import annotations

from pathlib import Path

import pytest

from localdeps.models import DependencyOption
from localdeps.selection import (
    group_selections,
    interface_count,
    order_options,
    parse_indexes,
    resolve_selection,
    selection_summary,
)


def _option(package: str, product: str, available: tuple[str, ...] = ()) -> DependencyOption:
    return DependencyOption(
        package_name=package,
        package_path=Path("/work") / package,
        product_name=product,
        display_path=package,
        available_products=available or (product,),
    )


@pytest.fixture
def ordered() -> list[DependencyOption]:
    options = [
        _option("Analytics", "Analytics"),
        _option("Analytics", "AnalyticsInterface"),
        _option("Core", "Core"),
        _option("Networking", "NetworkingInterface"),
    ]
    return order_options(options)


def test_interfaces_come_first_preserving_order(ordered: list[DependencyOption]) -> None:
    assert [option.label for option in ordered] == [
        "Analytics/AnalyticsInterface",
        "Networking/NetworkingInterface",
        "Analytics/Analytics",
        "Core/Core",
    ]
    assert interface_count(ordered) == 2


def test_interface_count_without_interfaces() -> None:
    assert interface_count([_option("Core", "Core")]) == 0
    assert interface_count([]) == 0


@pytest.mark.parametrize("raw", ["interfaces", "INTERFACES", "  Interfaces  "])
def test_keyword_selects_every_interface(ordered: list[DependencyOption], raw: str) -> None:
    selected = resolve_selection(raw, ordered)

    assert [option.product_name for option in selected] == ["AnalyticsInterface", "NetworkingInterface"]


def test_indices_are_one_based(ordered: list[DependencyOption]) -> None:
    selected = resolve_selection("1, 3", ordered)

    assert [option.label for option in selected] == ["Analytics/AnalyticsInterface", "Analytics/Analytics"]


def test_invalid_tokens_dropped(ordered: list[DependencyOption]) -> None:
    selected = resolve_selection("0 2 9 -1 abc 4", ordered)

    assert [option.label for option in selected] == ["Networking/NetworkingInterface", "Core/Core"]


@pytest.mark.parametrize("raw", ["", "   ", "99", "none", ",,,"])
def test_empty_or_invalid_selection(ordered: list[DependencyOption], raw: str) -> None:
    assert resolve_selection(raw, ordered) == []


def test_parse_indexes_accepts_mixed_separators() -> None:
    assert parse_indexes(" 1,2  3,,4\t5 ") == [1, 2, 3, 4, 5]
    assert parse_indexes("3,x,3") == [3, 3]


def test_grouping_dedupes_products_per_package() -> None:
    available = ("ProductX", "ProductY")
    first = _option("PackageA", "ProductX", available)
    second = _option("PackageA", "ProductY", available)
    other = _option("PackageB", "ProductZ")

    groups = group_selections([first, second, first, other])

    assert [group.package_name for group in groups] == ["PackageA", "PackageB"]
    assert groups[0].product_names == ["ProductX", "ProductY"]
    assert groups[0].available_products == available
    assert groups[0].package_path == Path("/work/PackageA")
    assert groups[1].product_names == ["ProductZ"]


def test_grouping_keys_on_path_not_name() -> None:
    left = DependencyOption("Shared", Path("/work/left"), "Shared", "left", ("Shared",))
    right = DependencyOption("Shared", Path("/work/right"), "Shared", "right", ("Shared",))

    groups = group_selections([left, right])

    assert [group.package_path for group in groups] == [Path("/work/left"), Path("/work/right")]


def test_selection_to_dict() -> None:
    (group,) = group_selections([_option("PackageA", "ProductX")])

    assert group.to_dict() == {
        "packageName": "PackageA",
        "packagePath": str(Path("/work/PackageA")),
        "productNames": ["ProductX"],
        "availableProducts": ["ProductX"],
    }


def test_selection_summary_sorted_unique() -> None:
    options = [_option("B", "Two"), _option("A", "One"), _option("B", "Two")]

    assert selection_summary(options) == ["A/One", "B/Two"]
