# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Cache CLI command package."""

from __future__ import annotations

import typer

from .command import cache_app

__all__ = ["register"]


def register(app: typer.Typer) -> None:
    """Register the ``cache`` command group on ``app``."""

    app.add_typer(cache_app, name="cache")
