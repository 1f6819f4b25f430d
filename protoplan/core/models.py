"""Domain models for code generation plans."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# Normalized directory -> full paths of schema files found directly in it.
DirectoryGroups = dict[str, list[str]]


class Invocation(BaseModel):
    """A fully specified external compiler call."""

    model_config = ConfigDict(frozen=True)

    binary: str = Field(..., min_length=1, description="Executable name")
    arguments: tuple[str, ...] = Field(..., description="Command line arguments")
    directory: str = Field(
        ..., description="Output directory, created before execution"
    )

    def __str__(self) -> str:
        """Join binary and arguments into the canonical command string.

        Schema files are passed as separate positional arguments:

            protoc --go-grpc_out=pkg/pbf/user/ --proto_path=pbf/user \\
                pbf/user/api.proto pbf/user/create.proto
        """
        return " ".join([self.binary, *self.arguments])


class OutputFile(BaseModel):
    """A generated file ready to be written."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., min_length=1, description="Destination file path")
    content: bytes = Field(..., description="Raw file content")


class IndexEntry(BaseModel):
    """One directory as seen by the index template."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="Scanned directory")
    dir: str = Field(..., description="Directory relative to the source root")
    name: str = Field(..., description="Exported identifier for the directory")


class Plan(BaseModel):
    """Everything a single generation run executes and writes."""

    model_config = ConfigDict(frozen=True)

    commands: list[Invocation] = Field(default_factory=list)
    files: list[OutputFile] = Field(default_factory=list)

    def sorted_commands(self) -> list[Invocation]:
        return sorted(self.commands, key=str)
