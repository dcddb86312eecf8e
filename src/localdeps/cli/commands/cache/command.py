# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI commands inspecting and clearing the package cache."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer

from ....cache import PackageCache
from ...shared import CLIError, build_cli_logger, load_cli_config
from ...typer_ext import create_typer

cache_app = create_typer(name="cache", help="Inspect or clear the package metadata cache.", no_args_is_help=True)

RootOption = Annotated[
    Path,
    typer.Option("--root", help="Workspace whose configuration locates the cache.", file_okay=False, resolve_path=True),
]
JsonOption = Annotated[bool, typer.Option("--json", help="Emit cache entries as JSON on stdout.")]
EmojiOption = Annotated[bool, typer.Option("--emoji/--no-emoji", help="Toggle emoji in console output.")]


def _open_cache(root: Path, *, emoji: bool) -> PackageCache:
    logger = build_cli_logger(emoji=emoji)
    try:
        config = load_cli_config(root, logger=logger).config
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc
    return PackageCache(
        config.cache.directory,
        manifest_name=config.discovery.manifest_name,
        use_emoji=emoji,
    )


@cache_app.command("show")
def show_command(
    root: RootOption = Path("."),
    as_json: JsonOption = False,
    emoji: EmojiOption = True,
) -> None:
    """Show cached packages."""

    cache = _open_cache(root, emoji=emoji)
    logger = build_cli_logger(emoji=emoji)
    entries = cache.entries
    if as_json:
        payload = {key: entry.model_dump(mode="json", by_alias=True) for key, entry in sorted(entries.items())}
        logger.echo(json.dumps(payload, indent=2))
        raise typer.Exit(code=0)
    logger.info(f"{len(entries)} cached package(s) in {cache.path}")
    for key, entry in sorted(entries.items()):
        products = ", ".join(product.name for product in entry.products) or "-"
        logger.echo(f"{entry.name}  {key}")
        logger.echo(f"    Products: {products}")
    raise typer.Exit(code=0)


@cache_app.command("clear")
def clear_command(
    root: RootOption = Path("."),
    emoji: EmojiOption = True,
) -> None:
    """Delete every cached package entry."""

    cache = _open_cache(root, emoji=emoji)
    count = len(cache)
    cache.clear()
    build_cli_logger(emoji=emoji).ok(f"Cleared {count} cached package(s)")
    raise typer.Exit(code=0)


__all__ = ["cache_app"]
