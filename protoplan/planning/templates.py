"""Compiler argument templates with fixed substitution slots."""

from __future__ import annotations

from string import Formatter

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..core.errors import ConfigurationError

# Slot order is load-bearing for the derived compiler arguments.
SLOTS = ("output_dir", "proto_path", "files")


def _template_fields(fmt: str) -> list[str]:
    try:
        parsed = list(Formatter().parse(fmt))
    except ValueError as e:
        raise ConfigurationError(f"Invalid argument template {fmt!r}: {e}") from e

    fields: list[str] = []
    for _, field, spec, conversion in parsed:
        if field is None:
            continue
        if spec or conversion:
            raise ConfigurationError(
                f"Argument template {fmt!r} must not use conversions or format specs"
            )
        fields.append(field)
    return fields


class ArgumentTemplate(BaseModel):
    """A compiler command line with {output_dir}, {proto_path} and {files} slots.

    The first whitespace separated token of the template is the binary.
    """

    model_config = ConfigDict(frozen=True)

    purpose: str = Field(..., description="What this invocation generates")
    format: str = Field(..., description="Command line format string")

    @model_validator(mode="after")
    def _check_slots(self) -> ArgumentTemplate:
        fields = _template_fields(self.format)

        unknown = sorted(set(fields) - set(SLOTS))
        if unknown:
            raise ConfigurationError(
                f"Argument template {self.purpose!r} uses unknown slot(s): "
                f"{', '.join(unknown) or 'positional'}. Allowed: {', '.join(SLOTS)}."
            )

        missing = [slot for slot in SLOTS if slot not in fields]
        if missing:
            raise ConfigurationError(
                f"Argument template {self.purpose!r} is missing slot(s): {', '.join(missing)}"
            )

        if self.format.split()[0].startswith("{"):
            raise ConfigurationError(
                f"Argument template {self.purpose!r} must start with a binary name"
            )
        return self

    @property
    def binary(self) -> str:
        return self.format.split()[0]

    def substitute(self, output_dir: str, proto_path: str, files: list[str]) -> str:
        return self.format.format(
            output_dir=output_dir, proto_path=proto_path, files=" ".join(files)
        )
