"""Aggregation file rendering."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from jinja2 import Environment, StrictUndefined, Template
from jinja2 import TemplateError as JinjaTemplateError

from ..core.errors import TemplateError
from ..core.models import DirectoryGroups, IndexEntry, OutputFile

if TYPE_CHECKING:
    from ..planning.targets import Target

logger = logging.getLogger(__name__)


def to_export(directory: str) -> str:
    """Derive an exported identifier from a directory's final path segment.

    Only the first letter is upper-cased, so ``user_api`` becomes ``User_api``.
    """
    name = os.path.basename(os.path.normpath(directory))
    if name in ("", ".", ".."):
        name = os.path.basename(os.path.abspath(directory))
    return name[:1].upper() + name[1:]


def _environment() -> Environment:
    env = Environment(
        undefined=StrictUndefined,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["to_export"] = to_export
    return env


def load_template(template_source: str) -> Template:
    """Compile a Jinja2 template from source text.

    Raises:
        TemplateError: If the template does not parse
    """
    try:
        return _environment().from_string(template_source)
    except JinjaTemplateError as e:
        raise TemplateError(f"Cannot parse index template: {e}") from e


def build_context(groups: DirectoryGroups, source: str = ".") -> list[IndexEntry]:
    """Build the template context, one entry per directory sorted by key."""
    root = os.path.normpath(source)
    return [
        IndexEntry(key=key, dir=os.path.relpath(key, root), name=to_export(key))
        for key in sorted(groups)
    ]


def _check_unique_names(entries: list[IndexEntry], output_path: str) -> None:
    """Identifiers become exported names, so two directories may not share one."""
    seen: dict[str, str] = {}
    for entry in entries:
        if entry.name in seen:
            raise TemplateError(
                f"Cannot render {output_path}: directories {seen[entry.name]} and "
                f"{entry.key} both export {entry.name!r}"
            )
        seen[entry.name] = entry.key


def render(
    groups: DirectoryGroups,
    template_source: str,
    output_path: str,
    source: str = ".",
) -> OutputFile:
    """Render an aggregation file for the scanned directories.

    Args:
        groups: Scanned directory groups
        template_source: Jinja2 template text, receives ``entries``
        output_path: Where the rendered file belongs
        source: Source root the directories are made relative to

    Returns:
        Output file descriptor holding the UTF-8 encoded text

    Raises:
        TemplateError: If the template fails to parse or render, or two
            directories derive the same identifier
    """
    template = load_template(template_source)
    entries = build_context(groups, source)
    _check_unique_names(entries, output_path)

    try:
        text = template.render(entries=entries)
    except JinjaTemplateError as e:
        raise TemplateError(f"Cannot render {output_path}: {e}") from e

    path = os.path.normpath(output_path)
    logger.debug(f"Rendered {path} with {len(entries)} entr(ies)")
    return OutputFile(path=path, content=text.encode("utf-8"))


def render_index(
    target: Target, groups: DirectoryGroups, source: str, destination: str
) -> list[OutputFile]:
    """Render the target's aggregation file, if it has one."""
    if target.index is None:
        return []

    output_path = os.path.join(destination, target.index.file_name)
    return [render(groups, target.index.template, output_path, source)]
