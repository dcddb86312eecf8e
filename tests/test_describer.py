# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for decoding describe output into package metadata."""

from __future__ import annotations

import json
import subprocess
from collections.abc import Sequence
from pathlib import Path
from subprocess import CompletedProcess

import pytest

from localdeps.discovery import PackageDescriber
from localdeps.discovery import describer as describer_module
from localdeps.errors import DescribeError
from localdeps.process_utils import TIMEOUT_RETURNCODE, run_command

DESCRIBE_OUTPUT = {
    "name": "Networking",
    "manifest_display_name": "Networking",
    "dependencies": [],
    "platforms": [{"name": "ios", "version": "16.0"}],
    "products": [
        {"name": "NetworkingInterface", "targets": ["NetworkingInterface"], "type": {"library": ["automatic"]}},
        {"name": "Networking", "targets": ["Networking"], "type": {"library": ["automatic"]}},
    ],
    "targets": [
        {"name": "NetworkingInterface", "type": "regular", "path": "Sources/NetworkingInterface"},
        {"name": "Networking", "type": "regular", "path": "Sources/Networking"},
        {"name": "NetworkingTests", "type": "test", "path": "Tests/NetworkingTests"},
    ],
}


class ScriptedRunner:
    def __init__(self, completed: CompletedProcess[str] | Exception) -> None:
        self.completed = completed
        self.invocations: list[tuple[tuple[str, ...], Path, float | None]] = []

    def __call__(self, cmd: Sequence[str], *, cwd: Path, timeout: float | None) -> CompletedProcess[str]:
        self.invocations.append((tuple(cmd), cwd, timeout))
        if isinstance(self.completed, Exception):
            raise self.completed
        return self.completed


def _completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> CompletedProcess[str]:
    return CompletedProcess(["swift"], returncode, stdout, stderr)


def test_describe_decodes_products_and_targets(tmp_path: Path) -> None:
    runner = ScriptedRunner(_completed(stdout=json.dumps(DESCRIBE_OUTPUT)))
    describer = PackageDescriber(runner=runner, locator=lambda name: f"/usr/bin/{name}")

    package = describer.describe(tmp_path)

    assert package.name == "Networking"
    assert package.path == tmp_path
    assert [product.name for product in package.products] == ["NetworkingInterface", "Networking"]
    assert package.products[1].target_names == ("Networking",)
    assert [(target.name, target.is_test) for target in package.targets] == [
        ("NetworkingInterface", False),
        ("Networking", False),
        ("NetworkingTests", True),
    ]
    assert runner.invocations == [(("swift", "package", "describe", "--type", "json"), tmp_path, 30.0)]


def test_describe_treats_missing_target_type_as_regular(tmp_path: Path) -> None:
    output = {"name": "Tiny", "products": [], "targets": [{"name": "Tiny"}]}
    describer = PackageDescriber(runner=ScriptedRunner(_completed(stdout=json.dumps(output))))

    package = describer.describe(tmp_path)

    assert package.targets[0].kind is None
    assert not package.targets[0].is_test


def test_describe_nonzero_exit_raises(tmp_path: Path) -> None:
    runner = ScriptedRunner(_completed(returncode=1, stderr="error: manifest parse error\nmore context\n"))
    describer = PackageDescriber(runner=runner)

    with pytest.raises(DescribeError) as excinfo:
        describer.describe(tmp_path)

    assert excinfo.value.directory == tmp_path
    assert excinfo.value.reason == "exited with status 1: error: manifest parse error"
    assert str(tmp_path) in str(excinfo.value)


def test_describe_timeout_reports_timeout_message(tmp_path: Path) -> None:
    runner = ScriptedRunner(_completed(returncode=TIMEOUT_RETURNCODE, stderr="Command timed out after 30.0s"))
    describer = PackageDescriber(runner=runner)

    with pytest.raises(DescribeError, match="timed out after 30.0s"):
        describer.describe(tmp_path)


@pytest.mark.parametrize(
    "stdout",
    [
        "",
        "warning: something\n{",
        json.dumps({"name": "NoProducts"}),
        json.dumps({"name": "Bad", "products": [{"name": "X"}], "targets": []}),
    ],
)
def test_describe_malformed_output_raises(tmp_path: Path, stdout: str) -> None:
    describer = PackageDescriber(runner=ScriptedRunner(_completed(stdout=stdout)))

    with pytest.raises(DescribeError, match="malformed describe output"):
        describer.describe(tmp_path)


def test_describe_launch_failure_raises(tmp_path: Path) -> None:
    describer = PackageDescriber(runner=ScriptedRunner(FileNotFoundError("swift not found")))

    with pytest.raises(DescribeError, match="swift not found"):
        describer.describe(tmp_path)


def test_describe_wraps_unexpected_runner_error(tmp_path: Path) -> None:
    describer = PackageDescriber(runner=ScriptedRunner(RuntimeError("boom")))

    with pytest.raises(DescribeError) as excinfo:
        describer.describe(tmp_path)

    assert excinfo.value.directory == tmp_path
    assert excinfo.value.reason == "RuntimeError: boom"
    assert isinstance(excinfo.value.__cause__, RuntimeError)


def test_is_available_uses_locator() -> None:
    seen: list[str] = []

    def locator(name: str) -> str | None:
        seen.append(name)
        return None

    describer = PackageDescriber(["xcrun", "swift", "package", "describe"], locator=locator)

    assert describer.is_available() is False
    assert seen == ["xcrun"]


def test_is_available_defaults_to_path_lookup(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(describer_module, "find_executable", lambda name: "/opt/bin/swift")

    assert PackageDescriber().is_available() is True


def test_empty_command_rejected() -> None:
    with pytest.raises(ValueError):
        PackageDescriber([])


def test_run_command_maps_timeout(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    def fake_run(*args, **kwargs):
        raise subprocess.TimeoutExpired(cmd=args[0], timeout=kwargs["timeout"], stderr=b"partial")

    monkeypatch.setattr(subprocess, "run", fake_run)

    completed = run_command(["/bin/swift", "package"], cwd=tmp_path, timeout=2.0)

    assert completed.returncode == TIMEOUT_RETURNCODE
    assert completed.stderr == "partial\nCommand timed out after 2.0s"


def test_run_command_returns_nonzero_exit(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        subprocess,
        "run",
        lambda *args, **kwargs: CompletedProcess(args[0], 3, "", "boom"),
    )

    completed = run_command(["/bin/swift"])

    assert completed.returncode == 3
    assert completed.stderr == "boom"


def test_run_command_missing_executable() -> None:
    with pytest.raises(FileNotFoundError):
        run_command(["definitely-not-a-real-executable-localdeps"])
