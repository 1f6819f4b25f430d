"""Source tree scanning for schema files."""

from __future__ import annotations

import logging
import os
from typing import Callable, Iterable, Iterator

from ..core.errors import ScanError
from ..core.models import DirectoryGroups

logger = logging.getLogger(__name__)

PROTO_EXTENSION = ".proto"

# Version control and CI metadata never contain schemas worth compiling.
PRUNED_DIRS = frozenset({".git", ".github"})

WalkFunc = Callable[..., Iterator[tuple[str, list[str], list[str]]]]


def _raise_scan_error(error: OSError) -> None:
    path = error.filename or "<unknown>"
    raise ScanError(f"Cannot scan {path}: {error.strerror or error}") from error


def scan(
    root: str,
    extension: str = PROTO_EXTENSION,
    pruned: Iterable[str] = PRUNED_DIRS,
    walk: WalkFunc = os.walk,
) -> DirectoryGroups:
    """Group schema files below root by their containing directory.

    Args:
        root: Directory to scan
        extension: File extension of schema files, including the dot
        pruned: Directory names whose subtrees are never visited
        walk: Tree walk primitive with the signature of os.walk

    Returns:
        Mapping of normalized directory to the sorted schema file paths
        found directly in it. Directories without schema files are absent.

    Raises:
        ScanError: If root or one of its subdirectories cannot be read
    """
    pruned = frozenset(pruned)
    top = os.path.normpath(root)

    if os.path.basename(top) in pruned:
        logger.debug(f"Source root {root} is pruned, nothing to scan")
        return {}

    groups: DirectoryGroups = {}
    for dirpath, dirnames, filenames in walk(top, onerror=_raise_scan_error):
        # Pruning in place keeps the walk from descending.
        dirnames[:] = [name for name in dirnames if name not in pruned]

        directory = os.path.normpath(dirpath)
        matches = [
            os.path.normpath(os.path.join(directory, name))
            for name in filenames
            if name.endswith(extension)
        ]
        if not matches:
            continue

        groups.setdefault(directory, []).extend(matches)
        logger.debug(f"Found {len(matches)} schema file(s) in {directory}")

    logger.info(f"Scanned {root}: {len(groups)} director(ies) with schema files")
    return {key: sorted(groups[key]) for key in sorted(groups)}
