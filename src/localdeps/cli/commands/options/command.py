# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI commands listing and selecting local package dependencies."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ....constants import ALL_INTERFACES_KEYWORD
from ....selection import group_selections, resolve_selection, selection_summary
from ....selector import DependencySelector, OptionListing
from ...shared import CLIError, CLILogger
from .models import (
    ColorOption,
    DiscoveryCLIOptions,
    EmojiOption,
    ExcludeOption,
    JobsOption,
    JsonOption,
    NoCacheOption,
    RootArgument,
    SequentialOption,
    VerboseOption,
)
from .services import dump_options, dump_selections, prepare_runtime, render_options, report_listing

SELECTION_PROMPT = (
    f"Select dependencies to add (comma-separated numbers, '{ALL_INTERFACES_KEYWORD}' "
    "for every Interface product, press Enter to skip)"
)

ChoiceOption = Annotated[
    str | None,
    typer.Option("--choice", "-c", help=f"Selection to apply without prompting (numbers or '{ALL_INTERFACES_KEYWORD}')."),
]


def _discover(options: DiscoveryCLIOptions) -> tuple[OptionListing, CLILogger]:
    try:
        config, logger = prepare_runtime(options)
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc
    listing = DependencySelector.from_config(config).discover_options(options.root)
    report_listing(listing, logger=logger)
    return listing, logger


def list_command(
    root: RootArgument = Path("."),
    exclude: ExcludeOption = None,
    as_json: JsonOption = False,
    sequential: SequentialOption = False,
    no_cache: NoCacheOption = False,
    jobs: JobsOption = None,
    verbose: VerboseOption = False,
    emoji: EmojiOption = True,
    color: ColorOption = True,
) -> None:
    """List dependency options discovered beneath ROOT."""

    options = DiscoveryCLIOptions(
        root=root,
        exclude=list(exclude or []),
        as_json=as_json,
        sequential=sequential,
        no_cache=no_cache,
        jobs=jobs,
        verbose=verbose,
        emoji=emoji,
        color=color,
    )
    listing, logger = _discover(options)
    if as_json:
        logger.echo(dump_options(listing.options))
        raise typer.Exit(code=0)
    if not listing.options:
        logger.info("No local package dependencies found")
        raise typer.Exit(code=0)
    render_options(listing, logger=logger)
    raise typer.Exit(code=0)


def select_command(
    root: RootArgument = Path("."),
    choice: ChoiceOption = None,
    exclude: ExcludeOption = None,
    as_json: JsonOption = False,
    sequential: SequentialOption = False,
    no_cache: NoCacheOption = False,
    jobs: JobsOption = None,
    verbose: VerboseOption = False,
    emoji: EmojiOption = True,
    color: ColorOption = True,
) -> None:
    """Choose dependency options discovered beneath ROOT and print them grouped by package."""

    options = DiscoveryCLIOptions(
        root=root,
        exclude=list(exclude or []),
        as_json=as_json,
        sequential=sequential,
        no_cache=no_cache,
        jobs=jobs,
        verbose=verbose,
        emoji=emoji,
        color=color,
    )
    listing, logger = _discover(options)
    if not listing.options:
        if as_json:
            logger.echo(dump_selections([]))
        else:
            logger.info("No local package dependencies found")
        raise typer.Exit(code=0)

    if choice is None:
        render_options(listing, logger=logger)
        choice = typer.prompt(SELECTION_PROMPT, default="", show_default=False, err=True)

    chosen = resolve_selection(choice, listing.options)
    if not chosen:
        if choice.strip():
            logger.warn("No valid selections detected. Continuing without additional dependencies.")
        else:
            logger.detail("No additional dependencies selected")
        if as_json:
            logger.echo(dump_selections([]))
        raise typer.Exit(code=0)

    selections = group_selections(chosen)
    if as_json:
        logger.echo(dump_selections(selections))
        raise typer.Exit(code=0)
    logger.ok(f"Added dependencies: {', '.join(selection_summary(chosen))}")
    for selection in selections:
        logger.echo(f"{selection.package_name} ({selection.package_path}): {', '.join(selection.product_names)}")
    raise typer.Exit(code=0)


__all__ = ["list_command", "select_command"]
