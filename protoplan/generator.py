"""Generation runs: scan, plan and render for one target."""

from __future__ import annotations

import logging
import os
from typing import Any, Callable

from pydantic import BaseModel, Field

from .core.errors import ConfigurationError
from .core.models import DirectoryGroups, Invocation, OutputFile, Plan
from .planning.planner import plan
from .planning.targets import Target
from .rendering.engine import render_index
from .scanning.tree import PROTO_EXTENSION, PRUNED_DIRS, scan

logger = logging.getLogger(__name__)


class GeneratorConfig(BaseModel):
    """Inputs of a generation run."""

    source: str = Field(..., description="Directory to look for schema files")
    destination: str = Field(..., description="Directory to generate code into")
    target: Target = Field(..., description="Target language")
    extension: str = Field(default=PROTO_EXTENSION, description="Schema file extension")
    walk: Callable[..., Any] | None = Field(
        default=os.walk, description="Tree walk primitive (os.walk signature)"
    )


class Generator:
    """Plans compiler invocations and index files for one target.

    Every call rescans the source tree; nothing is cached between calls.
    """

    def __init__(self, config: GeneratorConfig) -> None:
        if not config.source:
            raise ConfigurationError("GeneratorConfig.source must not be empty")
        if not config.destination:
            raise ConfigurationError("GeneratorConfig.destination must not be empty")
        if config.walk is None:
            raise ConfigurationError("GeneratorConfig.walk must not be empty")
        if not config.extension.startswith("."):
            raise ConfigurationError(
                f"GeneratorConfig.extension must start with a dot, got: {config.extension!r}"
            )

        self.config = config

    def groups(self) -> DirectoryGroups:
        return scan(
            self.config.source,
            extension=self.config.extension,
            pruned=PRUNED_DIRS,
            walk=self.config.walk,
        )

    def commands(self) -> list[Invocation]:
        return plan(
            self.groups(),
            self.config.source,
            self.config.destination,
            self.config.target.templates,
        )

    def files(self) -> list[OutputFile]:
        return render_index(
            self.config.target,
            self.groups(),
            self.config.source,
            self.config.destination,
        )

    def plan(self) -> Plan:
        """Scan once and build both invocations and index files."""
        groups = self.groups()
        target = self.config.target
        logger.debug(f"Planning target {target.name} for {len(groups)} director(ies)")

        return Plan(
            commands=plan(
                groups, self.config.source, self.config.destination, target.templates
            ),
            files=render_index(
                target, groups, self.config.source, self.config.destination
            ),
        )
