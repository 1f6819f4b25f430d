"""CLI argument parsers and validators."""

from __future__ import annotations

from pathlib import Path

import typer


def require_non_empty(value: str | None, flag: str) -> str | None:
    """Reject explicitly empty flag values; None means "use the default"."""
    if value is not None and not value.strip():
        raise typer.BadParameter(f"{flag} must not be empty")
    return value


def parse_timeout(value: float | None) -> float | None:
    """Validate a per-invocation timeout in seconds."""
    if value is not None and value <= 0:
        raise typer.BadParameter(f"Timeout must be positive, got: {value}")
    return value


def parse_targets_file(value: Path | None) -> Path | None:
    if value is not None and not value.is_file():
        raise typer.BadParameter(f"Targets file not found: {value}")
    return value
