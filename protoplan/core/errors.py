"""Exceptions raised while planning and running code generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Invocation


class ProtoplanError(Exception):
    """Base class for all protoplan failures."""


class ConfigurationError(ProtoplanError):
    """Raised when a required input is missing or malformed."""


class ScanError(ProtoplanError, OSError):
    """Raised when the source tree cannot be traversed."""


class TemplateError(ProtoplanError):
    """Raised when an aggregation template fails to parse or render."""


class CommandExecutionError(ProtoplanError):
    """Raised when an external compiler invocation fails."""

    def __init__(
        self, message: str, *, invocation: Invocation | None = None, output: str = ""
    ) -> None:
        super().__init__(message)
        self.invocation = invocation
        self.output = output

    def __str__(self) -> str:
        message = super().__str__()
        if self.output:
            return f"{message}\n{self.output.rstrip()}"
        return message
