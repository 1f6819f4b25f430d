"""Protoplan - gRPC code generation planner.

Scans a source tree for .proto files and plans the protoc invocations and
index files needed to generate target-language bindings.
"""

__version__ = "0.1.0"

import logging

# Silent unless the application configures logging; the CLI does.
logging.getLogger(__name__).addHandler(logging.NullHandler())

from .cli import main

__all__ = ["main"]
