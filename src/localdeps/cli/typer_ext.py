# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Typer application whose commands list their options alphabetically."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import click
import typer
from typer.core import TyperCommand, TyperGroup


def _sort_key(param: click.Parameter) -> str:
    long_names = [name for name in (*param.opts, *param.secondary_opts) if name.startswith("--")]
    label = long_names[0] if long_names else (param.name or "")
    return label.lstrip("-").lower()


class SortedTyperCommand(TyperCommand):
    """Command yielding arguments in declaration order, then options by long name."""

    def get_params(self, ctx: click.Context) -> list[click.Parameter]:
        params = super().get_params(ctx)
        arguments = [param for param in params if isinstance(param, click.Argument)]
        options = sorted((param for param in params if not isinstance(param, click.Argument)), key=_sort_key)
        return arguments + options


class SortedTyperGroup(TyperGroup):
    command_class = SortedTyperCommand


CommandCallback = TypeVar("CommandCallback", bound=Callable[..., Any])


class SortedTyper(typer.Typer):
    """Typer application registering :class:`SortedTyperCommand` commands."""

    def __init__(self, *args: Any, cls: type[TyperGroup] | None = None, **kwargs: Any) -> None:
        super().__init__(*args, cls=cls or SortedTyperGroup, **kwargs)

    def command(
        self,
        name: str | None = None,
        *,
        cls: type[TyperCommand] | None = None,
        **kwargs: Any,
    ) -> Callable[[CommandCallback], CommandCallback]:
        return super().command(name, cls=cls or SortedTyperCommand, **kwargs)


def create_typer(*, cls: type[TyperGroup] | None = None, **kwargs: Any) -> SortedTyper:
    """Return a :class:`SortedTyper` forwarding ``kwargs`` to Typer."""

    return SortedTyper(cls=cls, **kwargs)


__all__ = ["SortedTyper", "SortedTyperCommand", "SortedTyperGroup", "create_typer"]
