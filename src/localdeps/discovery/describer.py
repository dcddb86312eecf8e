# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Invoke the external describe tool and decode its JSON output."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from subprocess import CompletedProcess
from typing import Protocol, runtime_checkable

from pydantic import ValidationError

from ..constants import DESCRIBE_COMMAND, DESCRIBE_TIMEOUT_SECONDS
from ..errors import DescribeError
from ..models import DiscoveredPackage, PackageManifest
from ..process_utils import TIMEOUT_RETURNCODE, find_executable, run_command


@runtime_checkable
class DescribeRunner(Protocol):
    """Callable protocol for running the describe command in a directory."""

    def __call__(
        self,
        cmd: Sequence[str],
        *,
        cwd: Path,
        timeout: float | None,
    ) -> CompletedProcess[str]:
        """Execute ``cmd`` inside ``cwd`` returning the completed process."""

        raise NotImplementedError


def subprocess_runner(
    cmd: Sequence[str],
    *,
    cwd: Path,
    timeout: float | None,
) -> CompletedProcess[str]:
    """Run ``cmd`` through :func:`localdeps.process_utils.run_command`."""

    return run_command(cmd, cwd=cwd, timeout=timeout)


def _failure_reason(completed: CompletedProcess[str]) -> str:
    stderr = completed.stderr if isinstance(completed.stderr, str) else ""
    lines = [line.strip() for line in stderr.splitlines() if line.strip()]
    if completed.returncode == TIMEOUT_RETURNCODE and lines:
        return lines[-1]
    if lines:
        return f"exited with status {completed.returncode}: {lines[0]}"
    return f"exited with status {completed.returncode}"


class PackageDescriber:
    """Turn a package directory into :class:`DiscoveredPackage` metadata."""

    def __init__(
        self,
        command: Sequence[str] = DESCRIBE_COMMAND,
        *,
        timeout: float | None = DESCRIBE_TIMEOUT_SECONDS,
        runner: DescribeRunner | None = None,
        locator: Callable[[str], str | None] | None = None,
    ) -> None:
        """Configure the describe command and how it is executed.

        Args:
            command: Describe command, executable first.
            timeout: Seconds each invocation may run before it is abandoned.
            runner: Callable executing the command; defaults to a subprocess.
            locator: Callable resolving an executable name to a path;
                defaults to a ``PATH`` lookup.
        """

        if not command:
            raise ValueError("describe command requires at least one argument")
        self._command = tuple(command)
        self._timeout = timeout
        self._runner: DescribeRunner = runner if runner is not None else subprocess_runner
        self._locator = locator if locator is not None else find_executable

    @property
    def command(self) -> tuple[str, ...]:
        """Return the describe command."""

        return self._command

    @property
    def timeout(self) -> float | None:
        """Return the per-invocation timeout in seconds."""

        return self._timeout

    def is_available(self) -> bool:
        """Return whether the describe executable can be located."""

        return self._locator(self._command[0]) is not None

    def describe(self, directory: Path) -> DiscoveredPackage:
        """Describe the package rooted at ``directory``.

        Args:
            directory: Package directory used as the working directory.

        Returns:
            DiscoveredPackage: Decoded package metadata.

        Raises:
            DescribeError: If the runner raises, the process exits non-zero, times
                out, or prints output that does not decode as a manifest.
        """

        try:
            completed = self._runner(self._command, cwd=directory, timeout=self._timeout)
        except (OSError, ValueError) as exc:
            raise DescribeError(directory, str(exc)) from exc
        except Exception as exc:  # runner failures are confined to this directory
            raise DescribeError(directory, f"{type(exc).__name__}: {exc}") from exc
        if completed.returncode != 0:
            raise DescribeError(directory, _failure_reason(completed))
        try:
            manifest = PackageManifest.model_validate_json(completed.stdout or "")
        except ValidationError as exc:
            raise DescribeError(directory, f"malformed describe output ({exc.error_count()} errors)") from exc
        return DiscoveredPackage.from_manifest(manifest, directory)


__all__ = ["DescribeRunner", "PackageDescriber", "subprocess_runner"]
