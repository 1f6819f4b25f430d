"""Compiler invocation planning."""

from .planner import output_directory, plan
from .targets import TARGETS, IndexSpec, Target, get_target, load_targets
from .templates import ArgumentTemplate

__all__ = [
    "TARGETS",
    "ArgumentTemplate",
    "IndexSpec",
    "Target",
    "get_target",
    "load_targets",
    "output_directory",
    "plan",
]
