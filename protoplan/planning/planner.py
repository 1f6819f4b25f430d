"""Compiler invocation planning."""

from __future__ import annotations

import logging
import os
from typing import Iterable

from ..core.models import DirectoryGroups, Invocation
from .templates import ArgumentTemplate

logger = logging.getLogger(__name__)


def output_directory(directory: str, source: str, destination: str) -> str:
    """Map a scanned directory into the destination tree.

    ``pbf/user`` scanned from ``.`` into ``./pkg/`` becomes ``pkg/pbf/user``;
    the source root itself maps onto the destination.
    """
    relative = os.path.relpath(directory, os.path.normpath(source))
    return os.path.normpath(os.path.join(destination, relative))


def build_invocation(
    template: ArgumentTemplate, output_dir: str, proto_path: str, files: list[str]
) -> Invocation:
    # Whitespace splitting cannot represent paths containing spaces.
    binary, *arguments = template.substitute(output_dir, proto_path, files).split()
    return Invocation(binary=binary, arguments=tuple(arguments), directory=output_dir)


def plan(
    groups: DirectoryGroups,
    source: str,
    destination: str,
    templates: Iterable[ArgumentTemplate],
) -> list[Invocation]:
    """Build one invocation per directory group and template.

    Args:
        groups: Scanned directory groups
        source: Source root the groups were scanned from
        destination: Root directory for generated code
        templates: Argument templates of the target

    Returns:
        len(groups) * len(templates) invocations
    """
    templates = tuple(templates)

    commands: list[Invocation] = []
    for directory in sorted(groups):
        output_dir = output_directory(directory, source, destination)
        for template in templates:
            commands.append(
                build_invocation(template, output_dir, directory, groups[directory])
            )
        logger.debug(f"Planned {len(templates)} invocation(s) for {directory}")

    logger.info(f"Planned {len(commands)} invocation(s)")
    return commands
