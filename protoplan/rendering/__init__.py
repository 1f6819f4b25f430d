"""Aggregation file rendering and writing."""

from .engine import build_context, render, render_index, to_export
from .io import write_files

__all__ = ["build_context", "render", "render_index", "to_export", "write_files"]
