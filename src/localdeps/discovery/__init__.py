# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Package discovery: directory walk, describe invocation and scheduling."""

from __future__ import annotations

from .describer import DescribeRunner, PackageDescriber, subprocess_runner
from .service import DiscoveryReport, PackageDiscovery
from .strategies import (
    CandidateOutcome,
    CandidateResolver,
    ConcurrentStrategy,
    DiscoveryStrategy,
    SequentialStrategy,
    build_strategy,
)
from .walker import find_candidates

__all__ = [
    "CandidateOutcome",
    "CandidateResolver",
    "ConcurrentStrategy",
    "DescribeRunner",
    "DiscoveryReport",
    "DiscoveryStrategy",
    "PackageDescriber",
    "PackageDiscovery",
    "SequentialStrategy",
    "build_strategy",
    "find_candidates",
    "subprocess_runner",
]
