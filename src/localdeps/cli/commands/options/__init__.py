# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Dependency option CLI commands."""

from __future__ import annotations

import typer

from .command import list_command, select_command

__all__ = ["register"]


def register(app: typer.Typer) -> None:
    """Register the ``list`` and ``select`` commands on ``app``."""

    app.command(name="list")(list_command)
    app.command(name="select")(select_command)
