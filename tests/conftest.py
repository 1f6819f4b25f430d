"""Test fixtures for protoplan tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

# Source trees used across the test modules, mirroring real api repositories.
SINGLE = ["pbf/foo.proto"]
POST_AND_USER = [
    "pbf/post/api.proto",
    "pbf/post/create.proto",
    "pbf/user/foo.proto",
    "pbf/user/bar.proto",
    "pbf/user/baz.proto",
]
NESTED = POST_AND_USER + [
    "pbf/more/deeply/nested/foo.proto",
    "pbf/more/deeply/nested/bar.proto",
    "pbf/more/deeply/nested/baz.proto",
]


def make_tree(root: Path, files: list[str], dirs: list[str] | None = None) -> Path:
    """Create empty files (and extra empty directories) below root."""
    for directory in dirs or []:
        (root / directory).mkdir(parents=True, exist_ok=True)
    for name in files:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"")
    return root


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty temporary directory so relative paths work."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def tree(workdir: Path) -> Callable[..., Path]:
    def _tree(files: list[str], dirs: list[str] | None = None) -> Path:
        return make_tree(workdir, files, dirs)

    return _tree


@pytest.fixture(autouse=True)
def _clean_settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "PROTOPLAN_SOURCE",
        "PROTOPLAN_DESTINATION",
        "PROTOPLAN_EXTENSION",
        "PROTOPLAN_TIMEOUT",
        "PROTOPLAN_TARGETS_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
