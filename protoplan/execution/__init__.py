"""External compiler execution."""

from .runner import ensure_binaries, run_all, run_invocation

__all__ = ["ensure_binaries", "run_all", "run_invocation"]
