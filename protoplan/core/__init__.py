"""Core models and errors shared by every stage."""

from .errors import (
    CommandExecutionError,
    ConfigurationError,
    ProtoplanError,
    ScanError,
    TemplateError,
)
from .models import DirectoryGroups, IndexEntry, Invocation, OutputFile, Plan

__all__ = [
    "CommandExecutionError",
    "ConfigurationError",
    "DirectoryGroups",
    "IndexEntry",
    "Invocation",
    "OutputFile",
    "Plan",
    "ProtoplanError",
    "ScanError",
    "TemplateError",
]
