# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for console logging helpers."""

from __future__ import annotations

import pytest

from localdeps.console import get_console_manager
from localdeps.logging import emoji, info, ok, warn


def test_emoji_toggle() -> None:
    assert emoji("✅", True) == "✅"
    assert emoji("✅", False) == ""


def test_messages_go_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    warn("cache unavailable", use_emoji=False, use_color=False)
    ok("done", use_emoji=True, use_color=False)

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "cache unavailable" in captured.err
    assert "✅ done" in captured.err


def test_markup_is_not_interpreted(capsys: pytest.CaptureFixture[str]) -> None:
    info("[bold]literal[/bold]", use_emoji=False, use_color=False)

    assert "[bold]literal[/bold]" in capsys.readouterr().err


def test_console_manager_caches_consoles() -> None:
    manager = get_console_manager()

    first = manager.get(color=False, emoji=False)

    assert manager.get(color=False, emoji=False) is first
    assert manager.get(color=False, emoji=True) is not first
