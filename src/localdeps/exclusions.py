# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exclusion patterns removing packages from the offered options."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from .constants import WILDCARD
from .models import DependencyOption


def wildcard_to_regex(pattern: str) -> re.Pattern[str]:
    """Translate ``pattern`` so ``*`` matches any run of characters, case-insensitively."""

    body = ".*".join(re.escape(part) for part in pattern.split(WILDCARD))
    return re.compile(body, re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class ExclusionRule:
    """Predicate telling whether a package name matches one exclusion pattern.

    Rules, tried in order: exact (case-sensitive) equality; a full
    case-insensitive match when the pattern contains ``*``; otherwise
    case-insensitive substring containment.
    """

    pattern: str
    regex: re.Pattern[str] | None = None

    def __call__(self, name: str) -> bool:
        if name == self.pattern:
            return True
        if self.regex is not None:
            return self.regex.fullmatch(name) is not None
        return self.pattern.casefold() in name.casefold()


def compile_exclusion(pattern: str) -> ExclusionRule:
    """Return the :class:`ExclusionRule` for ``pattern``."""

    regex = wildcard_to_regex(pattern) if WILDCARD in pattern else None
    return ExclusionRule(pattern=pattern, regex=regex)


def matches_exclusion(name: str, pattern: str) -> bool:
    """Return whether package ``name`` is excluded by ``pattern``."""

    return compile_exclusion(pattern)(name)


@dataclass(frozen=True, slots=True)
class ExclusionResult:
    """Options that survived filtering and what the filter removed."""

    options: list[DependencyOption] = field(default_factory=list)
    removed: int = 0
    patterns: tuple[str, ...] = ()


def normalise_patterns(patterns: Iterable[str]) -> tuple[str, ...]:
    """Return stripped, non-blank, de-duplicated patterns in first-seen order."""

    stripped = (pattern.strip() for pattern in patterns)
    return tuple(dict.fromkeys(pattern for pattern in stripped if pattern))


def filter_excluded(options: Sequence[DependencyOption], patterns: Iterable[str]) -> ExclusionResult:
    """Drop options whose package name matches any exclusion pattern.

    Args:
        options: Options to filter; order is preserved.
        patterns: Exclusion patterns; blank entries are ignored.

    Returns:
        ExclusionResult: Remaining options, removed count and active patterns.
    """

    active = normalise_patterns(patterns)
    if not active:
        return ExclusionResult(options=list(options))
    rules = [compile_exclusion(pattern) for pattern in active]
    kept = [option for option in options if not any(rule(option.package_name) for rule in rules)]
    return ExclusionResult(options=kept, removed=len(options) - len(kept), patterns=active)


__all__ = [
    "ExclusionResult",
    "ExclusionRule",
    "compile_exclusion",
    "filter_excluded",
    "matches_exclusion",
    "normalise_patterns",
    "wildcard_to_regex",
]
