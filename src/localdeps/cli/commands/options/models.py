# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Option models shared by the ``list`` and ``select`` commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated

import typer

RootArgument = Annotated[
    Path,
    typer.Argument(help="Workspace root to search for packages.", exists=True, file_okay=False, resolve_path=True),
]
ExcludeOption = Annotated[
    list[str] | None,
    typer.Option("--exclude", "-x", help="Exclude packages matching PATTERN (exact, substring or '*' wildcard)."),
]
JsonOption = Annotated[bool, typer.Option("--json", help="Emit machine-readable JSON on stdout.")]
SequentialOption = Annotated[
    bool,
    typer.Option("--sequential", help="Describe packages one at a time instead of in parallel."),
]
NoCacheOption = Annotated[bool, typer.Option("--no-cache", help="Ignore and do not update the package cache.")]
JobsOption = Annotated[
    int | None,
    typer.Option("--jobs", "-j", min=1, help="Maximum concurrent describe invocations."),
]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Print discovery diagnostics.")]
EmojiOption = Annotated[bool, typer.Option("--emoji/--no-emoji", help="Toggle emoji in console output.")]
ColorOption = Annotated[bool, typer.Option("--color/--no-color", help="Toggle colour in console output.")]


@dataclass(slots=True)
class DiscoveryCLIOptions:
    """Flags controlling discovery and presentation for option commands."""

    root: Path
    exclude: list[str] = field(default_factory=list)
    as_json: bool = False
    sequential: bool = False
    no_cache: bool = False
    jobs: int | None = None
    verbose: bool = False
    emoji: bool = True
    color: bool = True


__all__ = [
    "ColorOption",
    "DiscoveryCLIOptions",
    "EmojiOption",
    "ExcludeOption",
    "JobsOption",
    "JsonOption",
    "NoCacheOption",
    "RootArgument",
    "SequentialOption",
    "VerboseOption",
]
