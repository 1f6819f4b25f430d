"""Per-language code generation targets."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..core.errors import ConfigurationError
from ..rendering.templates import TYPESCRIPT_INDEX
from .templates import ArgumentTemplate

logger = logging.getLogger(__name__)


class IndexSpec(BaseModel):
    """An aggregation file rendered next to the generated code."""

    model_config = ConfigDict(frozen=True)

    file_name: str = Field(..., min_length=1, description="File name below destination")
    template: str = Field(..., description="Jinja2 template source")


class Target(BaseModel):
    """A target language: compiler invocations plus an optional index file."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    templates: tuple[ArgumentTemplate, ...] = Field(..., min_length=1)
    index: IndexSpec | None = None


# Messages and services are generated separately while the upstream Go gRPC
# plugins are split into protoc-gen-go and protoc-gen-go-grpc.
GOLANG = Target(
    name="golang",
    templates=(
        ArgumentTemplate(
            purpose="messages",
            format="protoc --go_out={output_dir}/ --proto_path={proto_path} {files}",
        ),
        ArgumentTemplate(
            purpose="services",
            format="protoc --go-grpc_out={output_dir}/ --proto_path={proto_path} {files}",
        ),
    ),
)

# Legacy javascript and grpc-web typescript still need two protoc runs.
TYPESCRIPT = Target(
    name="typescript",
    templates=(
        ArgumentTemplate(
            purpose="javascript",
            format=(
                "protoc --experimental_allow_proto3_optional"
                " --js_out=import_style=commonjs,binary:{output_dir}"
                " --proto_path={proto_path} {files}"
            ),
        ),
        ArgumentTemplate(
            purpose="typescript",
            format=(
                "protoc --experimental_allow_proto3_optional"
                " --grpc-web_out=import_style=typescript,mode=grpcwebtext:{output_dir}"
                " --proto_path={proto_path} {files}"
            ),
        ),
    ),
    index=IndexSpec(file_name="index.ts", template=TYPESCRIPT_INDEX),
)

TARGETS: dict[str, Target] = {target.name: target for target in (GOLANG, TYPESCRIPT)}


def get_target(name: str, targets: dict[str, Target] | None = None) -> Target:
    """Look up a target by name.

    Raises:
        ConfigurationError: If no target has that name
    """
    table = TARGETS if targets is None else targets
    try:
        return table[name]
    except KeyError:
        known = ", ".join(sorted(table)) or "none"
        raise ConfigurationError(f"Unknown target {name!r}. Known targets: {known}") from None


def parse_targets(data: Any) -> dict[str, Target]:
    """Build targets from a mapping of name to target fields."""
    if not isinstance(data, dict) or not data:
        raise ConfigurationError("Targets must be a non-empty mapping of name to target")

    targets: dict[str, Target] = {}
    for name, fields in data.items():
        if not isinstance(fields, dict):
            raise ConfigurationError(f"Target {name!r} must be a mapping")
        try:
            targets[name] = Target(**{**fields, "name": name})
        except ValidationError as e:
            raise ConfigurationError(f"Invalid target {name!r}: {e}") from e
    return targets


def load_targets(path: Path) -> dict[str, Target]:
    """Load targets from a YAML file, overriding built-ins of the same name.

    Example::

        python:
          templates:
            - purpose: messages
              format: "protoc --python_out={output_dir} --proto_path={proto_path} {files}"
    """
    if not path.exists():
        raise ConfigurationError(f"Targets file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    loaded = parse_targets(data)
    logger.debug(f"Loaded {len(loaded)} target(s) from {path}")
    return {**TARGETS, **loaded}
