"""Schema discovery."""

from .tree import PROTO_EXTENSION, PRUNED_DIRS, scan

__all__ = ["PROTO_EXTENSION", "PRUNED_DIRS", "scan"]
