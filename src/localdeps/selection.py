# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Ordering, selection parsing and grouping of dependency options."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from typing import Final

from .constants import ALL_INTERFACES_KEYWORD, INTERFACE_SUFFIX
from .models import DependencyOption, DependencySelection

_SEPARATORS: Final[re.Pattern[str]] = re.compile(r"[,\s]+")


def is_interface(option: DependencyOption) -> bool:
    """Return whether ``option`` is an interface-style product."""

    return option.product_name.endswith(INTERFACE_SUFFIX)


def order_options(options: Iterable[DependencyOption]) -> list[DependencyOption]:
    """Return interface-style options first, keeping each group's order."""

    materialised = list(options)
    interfaces = [option for option in materialised if is_interface(option)]
    remaining = [option for option in materialised if not is_interface(option)]
    return interfaces + remaining


def interface_count(ordered: Sequence[DependencyOption]) -> int:
    """Return the length of the leading run of interface-style options."""

    count = 0
    for option in ordered:
        if not is_interface(option):
            break
        count += 1
    return count


def parse_indexes(raw: str) -> list[int]:
    """Return the integers found in a comma/whitespace separated ``raw`` string.

    Tokens that are not integers are dropped; order and duplicates are kept.
    """

    indexes: list[int] = []
    for token in _SEPARATORS.split(raw.strip()):
        if not token:
            continue
        try:
            indexes.append(int(token))
        except ValueError:
            continue
    return indexes


def resolve_selection(raw: str, ordered: Sequence[DependencyOption]) -> list[DependencyOption]:
    """Map a user's selection onto ``ordered`` options.

    ``raw`` is either the all-interfaces keyword or 1-based indices into
    ``ordered``. Out-of-range indices are dropped; empty or entirely invalid
    input selects nothing.

    Args:
        raw: Free-text selection line.
        ordered: Options exactly as displayed to the user.

    Returns:
        list[DependencyOption]: Selected options in input order, duplicates kept.
    """

    text = raw.strip()
    if not text:
        return []
    if text.casefold() == ALL_INTERFACES_KEYWORD:
        return [option for option in ordered if is_interface(option)]
    return [ordered[index - 1] for index in parse_indexes(text) if 0 < index <= len(ordered)]


def group_selections(selected: Iterable[DependencyOption]) -> list[DependencySelection]:
    """Group selected options by package path in first-encounter order.

    Args:
        selected: Selected options, possibly repeating products.

    Returns:
        list[DependencySelection]: One entry per package with unique products.
    """

    grouped: dict[str, DependencySelection] = {}
    for option in selected:
        key = str(option.package_path)
        entry = grouped.get(key)
        if entry is None:
            entry = DependencySelection(
                package_name=option.package_name,
                package_path=option.package_path,
                available_products=option.available_products,
            )
            grouped[key] = entry
        entry.add_product(option.product_name)
    return list(grouped.values())


def selection_summary(selected: Iterable[DependencyOption]) -> list[str]:
    """Return sorted, de-duplicated ``package/product`` labels."""

    return sorted({option.label for option in selected})


__all__ = [
    "group_selections",
    "interface_count",
    "is_interface",
    "order_options",
    "parse_indexes",
    "resolve_selection",
    "selection_summary",
]
