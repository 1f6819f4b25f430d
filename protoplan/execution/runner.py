"""Execution of planned compiler invocations."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from typing import Iterable, Sequence

from ..core.errors import CommandExecutionError
from ..core.models import Invocation

logger = logging.getLogger(__name__)


def ensure_binaries(commands: Iterable[Invocation]) -> None:
    """Fail early when a planned binary is not on PATH."""
    missing = sorted({c.binary for c in commands if shutil.which(c.binary) is None})
    if missing:
        raise CommandExecutionError(f"Missing dependency: {', '.join(missing)}")


def run_invocation(
    invocation: Invocation,
    *,
    cwd: str | None = None,
    timeout: float | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run a single compiler invocation.

    protoc does not create its output directories, so the invocation's
    directory is created first. Paths in the arguments are relative to cwd,
    not to that directory.

    Args:
        invocation: Invocation to execute
        cwd: Directory to run in (default: current directory)
        timeout: Seconds to wait before giving up

    Returns:
        Completed process with combined stdout/stderr

    Raises:
        CommandExecutionError: On non-zero exit, missing binary or timeout
    """
    directory = invocation.directory
    if cwd is not None and not os.path.isabs(directory):
        directory = os.path.join(cwd, directory)
    os.makedirs(directory, exist_ok=True)

    cmd: Sequence[str] = [invocation.binary, *invocation.arguments]
    logger.info(f"Running {invocation}")

    try:
        result = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            cwd=cwd,
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise CommandExecutionError(
            f"Cannot execute {invocation.binary}: {e.strerror}", invocation=invocation
        ) from e
    except subprocess.TimeoutExpired as e:
        # TimeoutExpired keeps raw bytes even in text mode.
        output = (
            e.output.decode("utf-8", "replace")
            if isinstance(e.output, bytes)
            else (e.output or "")
        )
        raise CommandExecutionError(
            f"Timed out after {timeout}s: {invocation}",
            invocation=invocation,
            output=output,
        ) from e

    if result.returncode != 0:
        raise CommandExecutionError(
            f"Command exited with status {result.returncode}: {invocation}",
            invocation=invocation,
            output=result.stdout or "",
        )

    if result.stdout:
        logger.debug(result.stdout.rstrip())
    return result


def run_all(
    commands: Iterable[Invocation],
    *,
    cwd: str | None = None,
    timeout: float | None = None,
) -> int:
    """Run invocations in canonical order, stopping at the first failure.

    Returns:
        Number of invocations run
    """
    ordered = sorted(commands, key=str)
    for invocation in ordered:
        run_invocation(invocation, cwd=cwd, timeout=timeout)

    logger.info(f"Ran {len(ordered)} invocation(s)")
    return len(ordered)
