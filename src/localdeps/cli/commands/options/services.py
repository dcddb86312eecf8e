# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helper services for the ``list`` and ``select`` commands."""

from __future__ import annotations

import json
from collections.abc import Sequence

from ....config import Config
from ....models import DependencyOption, DependencySelection
from ....selector import OptionListing
from ...shared import CLILogger, build_cli_logger, enable_verbose_logging, load_cli_config
from .models import DiscoveryCLIOptions

NON_INTERFACE_WARNING = "Selecting non-Interface packages can introduce performance impact."


def prepare_runtime(options: DiscoveryCLIOptions) -> tuple[Config, CLILogger]:
    """Load configuration for ``options.root`` and apply CLI overrides.

    Raises:
        CLIError: If configuration cannot be loaded.
    """

    bootstrap = build_cli_logger(emoji=options.emoji, debug=options.verbose, no_color=not options.color)
    config = load_cli_config(options.root, logger=bootstrap).config

    output = config.output
    output.verbose = output.verbose or options.verbose
    output.emoji = output.emoji and options.emoji
    output.color = output.color and options.color
    if options.sequential:
        config.discovery.parallel = False
    if options.jobs is not None:
        config.discovery.concurrency = options.jobs
    if options.no_cache:
        config.cache.enabled = False
    if options.exclude:
        config.selection.exclusions = [*config.selection.exclusions, *options.exclude]

    if output.verbose:
        enable_verbose_logging()
    logger = build_cli_logger(emoji=output.emoji, debug=output.verbose, no_color=not output.color)
    return config, logger


def report_listing(listing: OptionListing, *, logger: CLILogger) -> None:
    """Log discovery counters and the effect of exclusion patterns."""

    report = listing.report
    if report is not None:
        logger.debug(
            f"candidates={report.candidates} cache_hits={report.cache_hits} "
            f"described={report.described} skipped={len(report.skipped)}",
        )
        for error in report.skipped:
            logger.debug(f"skipped path={error.directory} reason={error.reason!r}")
    exclusion = listing.exclusion
    if exclusion.removed:
        patterns = ", ".join(exclusion.patterns)
        logger.info(f"Excluded {exclusion.removed} option(s) matching: {patterns}")


def render_options(listing: OptionListing, *, logger: CLILogger) -> None:
    """Print numbered options, warning before the first non-interface product."""

    options = listing.options
    boundary = listing.interface_count
    logger.info("Available dependencies:")
    for index, option in enumerate(options):
        if index == boundary:
            if index > 0:
                logger.echo("")
            logger.warn(NON_INTERFACE_WARNING)
            logger.echo("")
        logger.echo(f"{index + 1:2d}. {option.package_name} / {option.product_name}")
        logger.echo(f"    Path: {option.display_path}")


def option_payload(option: DependencyOption, index: int) -> dict[str, object]:
    """Return the JSON representation of ``option`` at 1-based ``index``."""

    return {
        "index": index,
        "packageName": option.package_name,
        "packagePath": str(option.package_path),
        "productName": option.product_name,
        "displayPath": option.display_path,
        "availableProducts": list(option.available_products),
    }


def dump_options(options: Sequence[DependencyOption]) -> str:
    """Return ``options`` as an indented JSON array."""

    return json.dumps([option_payload(option, index) for index, option in enumerate(options, start=1)], indent=2)


def dump_selections(selections: Sequence[DependencySelection]) -> str:
    """Return ``selections`` as an indented JSON array."""

    return json.dumps([selection.to_dict() for selection in selections], indent=2)


__all__ = [
    "NON_INTERFACE_WARNING",
    "dump_options",
    "dump_selections",
    "option_payload",
    "prepare_runtime",
    "render_options",
    "report_listing",
]
