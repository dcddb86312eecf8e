# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from subprocess import CompletedProcess
from threading import Lock
from typing import Any

import pytest

from localdeps.console import get_console_manager

DESCRIBE_FIXTURE = "describe.json"


@dataclass
class FakeDescribeRunner:
    """Describe runner replaying ``describe.json`` files and tracking concurrency."""

    delay: float = 0.0
    calls: list[Path] = field(default_factory=list)
    active: int = 0
    peak: int = 0
    _lock: Lock = field(default_factory=Lock)

    def __call__(self, cmd: Sequence[str], *, cwd: Path, timeout: float | None) -> CompletedProcess[str]:
        with self._lock:
            self.calls.append(cwd)
            self.active += 1
            self.peak = max(self.peak, self.active)
        try:
            if self.delay:
                time.sleep(self.delay)
            payload = cwd / DESCRIBE_FIXTURE
            if not payload.is_file():
                return CompletedProcess(list(cmd), 1, "", "error: invalid manifest\n")
            return CompletedProcess(list(cmd), 0, payload.read_text(encoding="utf-8"), "")
        finally:
            with self._lock:
                self.active -= 1


def describe_payload(
    name: str,
    products: Sequence[tuple[str, Sequence[str]]] | None = None,
    targets: Sequence[tuple[str, str | None]] | None = None,
) -> dict[str, Any]:
    """Return a describe-style payload with one library and one test target by default."""

    if products is None:
        products = [(name, [name])]
    if targets is None:
        targets = [(name, "regular"), (f"{name}Tests", "test")]
    return {
        "name": name,
        "manifest_display_name": name,
        "products": [
            {"name": product, "targets": list(names), "type": {"library": ["automatic"]}} for product, names in products
        ],
        "targets": [{"name": target, "type": kind, "path": f"Sources/{target}"} for target, kind in targets],
    }


PackageFactory = Callable[..., Path]


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point ``HOME`` at a scratch directory so no test touches the real cache."""

    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    get_console_manager().reset()
    return home


@pytest.fixture
def fake_runner() -> FakeDescribeRunner:
    return FakeDescribeRunner()


@pytest.fixture
def make_package() -> PackageFactory:
    """Return a factory creating a package directory with a manifest.

    ``broken=True`` omits the describe payload so the fake runner fails.
    """

    def _make(
        root: Path,
        relative: str,
        name: str | None = None,
        *,
        products: Sequence[tuple[str, Sequence[str]]] | None = None,
        targets: Sequence[tuple[str, str | None]] | None = None,
        broken: bool = False,
    ) -> Path:
        directory = root / relative if relative else root
        directory.mkdir(parents=True, exist_ok=True)
        (directory / "Package.swift").write_text("// swift-tools-version:5.9\n", encoding="utf-8")
        if not broken:
            payload = describe_payload(name or directory.name, products, targets)
            (directory / DESCRIBE_FIXTURE).write_text(json.dumps(payload), encoding="utf-8")
        return directory.resolve()

    return _make
