"""Tests for compiler execution."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

from protoplan.core.errors import CommandExecutionError
from protoplan.core.models import Invocation
from protoplan.execution import ensure_binaries, run_all, run_invocation
from protoplan.execution import runner


class FakeRun:
    """Records subprocess.run calls and answers with a canned result."""

    def __init__(self, returncode: int = 0, stdout: str = "", exc: Exception | None = None):
        self.returncode = returncode
        self.stdout = stdout
        self.exc = exc
        self.calls: list[tuple[list[str], dict]] = []

    def __call__(self, cmd, **kwargs):
        self.calls.append((list(cmd), kwargs))
        if self.exc is not None:
            raise self.exc
        return subprocess.CompletedProcess(cmd, self.returncode, stdout=self.stdout)


def _invocation(directory: str = "pkg/pbf", *files: str) -> Invocation:
    return Invocation(
        binary="protoc",
        arguments=(f"--go_out={directory}/", "--proto_path=pbf", *(files or ("pbf/foo.proto",))),
        directory=directory,
    )


def test_run_creates_directory_and_merges_output(
    workdir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    fake = FakeRun(stdout="ok\n")
    monkeypatch.setattr(runner.subprocess, "run", fake)

    result = run_invocation(_invocation(), timeout=30)

    assert (workdir / "pkg/pbf").is_dir()
    assert result.stdout == "ok\n"
    (cmd, kwargs), = fake.calls
    assert cmd == ["protoc", "--go_out=pkg/pbf/", "--proto_path=pbf", "pbf/foo.proto"]
    assert kwargs["stderr"] is subprocess.STDOUT
    assert kwargs["stdout"] is subprocess.PIPE
    assert kwargs["timeout"] == 30
    assert kwargs["cwd"] is None


def test_run_relative_directory_below_cwd(workdir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(runner.subprocess, "run", FakeRun())
    (workdir / "repo").mkdir()

    run_invocation(_invocation(), cwd=str(workdir / "repo"))

    assert (workdir / "repo/pkg/pbf").is_dir()
    assert not (workdir / "pkg").exists()


def test_non_zero_exit_carries_output(workdir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        runner.subprocess, "run", FakeRun(returncode=1, stdout="pbf/foo.proto: not found\n")
    )

    with pytest.raises(CommandExecutionError) as excinfo:
        run_invocation(_invocation())

    assert excinfo.value.output == "pbf/foo.proto: not found\n"
    assert excinfo.value.invocation == _invocation()
    assert "status 1" in str(excinfo.value)
    assert "not found" in str(excinfo.value)


def test_missing_binary(workdir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        runner.subprocess,
        "run",
        FakeRun(exc=FileNotFoundError(2, "No such file or directory", "protoc")),
    )
    with pytest.raises(CommandExecutionError, match="Cannot execute protoc"):
        run_invocation(_invocation())


def test_timeout(workdir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        runner.subprocess,
        "run",
        FakeRun(exc=subprocess.TimeoutExpired(["protoc"], 5, output=b"partial")),
    )
    with pytest.raises(CommandExecutionError, match="Timed out after 5s") as excinfo:
        run_invocation(_invocation(), timeout=5)
    assert excinfo.value.output == "partial"


def test_timeout_without_output(workdir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        runner.subprocess, "run", FakeRun(exc=subprocess.TimeoutExpired(["protoc"], 5))
    )
    with pytest.raises(CommandExecutionError) as excinfo:
        run_invocation(_invocation(), timeout=5)
    assert excinfo.value.output == ""


@pytest.mark.skipif(shutil.which("sh") is None, reason="needs a POSIX shell")
def test_timeout_keeps_partial_output_of_real_process(workdir: Path) -> None:
    invocation = Invocation(
        binary="sh", arguments=("-c", "echo partial-output; sleep 5"), directory="pkg"
    )
    with pytest.raises(CommandExecutionError) as excinfo:
        run_invocation(invocation, timeout=1)
    assert "partial-output" in excinfo.value.output


def test_run_all_is_ordered_and_stops_at_first_failure(
    workdir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    calls: list[str] = []

    def fake_run(cmd, **kwargs):
        calls.append(cmd[1])
        returncode = 1 if cmd[1] == "--go_out=pkg/b/" else 0
        return subprocess.CompletedProcess(cmd, returncode, stdout="")

    monkeypatch.setattr(runner.subprocess, "run", fake_run)
    commands = [_invocation("pkg/c"), _invocation("pkg/b"), _invocation("pkg/a")]

    with pytest.raises(CommandExecutionError):
        run_all(commands)

    assert calls == ["--go_out=pkg/a/", "--go_out=pkg/b/"]


def test_run_all_counts_invocations(workdir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(runner.subprocess, "run", FakeRun())
    assert run_all([_invocation("pkg/a"), _invocation("pkg/b")]) == 2
    assert run_all([]) == 0


def test_ensure_binaries(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(runner.shutil, "which", lambda name: None if name == "protoc" else name)

    ensure_binaries([Invocation(binary="buf", arguments=(), directory=".")])
    with pytest.raises(CommandExecutionError, match="Missing dependency: protoc"):
        ensure_binaries([_invocation(), _invocation("pkg/other")])
