"""Main CLI application."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from ..core.errors import ProtoplanError
from ..core.models import Plan
from ..execution import runner
from ..generator import Generator, GeneratorConfig
from ..planning.targets import TARGETS, Target, get_target, load_targets
from ..rendering import io
from ..settings import Settings
from .parsers import parse_targets_file, parse_timeout, require_non_empty

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="protoplan",
    help="Generate gRPC code based on protocol buffer schemas.",
    no_args_is_help=True,
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )


def _targets(targets_file: Path | None) -> dict[str, Target]:
    return load_targets(targets_file) if targets_file else TARGETS


def _echo_plan(plan: Plan) -> None:
    for command in plan.sorted_commands():
        typer.echo(str(command))
    for output in plan.files:
        typer.echo(f"write {output.path}")


@app.command()
def generate(
    target: Annotated[
        str,
        typer.Argument(help="Target language, e.g. golang or typescript."),
    ],
    source: Annotated[
        Optional[str],
        typer.Option(
            "--source",
            "-s",
            help="Directory to look for the gRPC api schema definitions (default: .).",
            metavar="DIR",
        ),
    ] = None,
    destination: Annotated[
        Optional[str],
        typer.Option(
            "--destination",
            "-d",
            help="Directory to put the generated code into (default: ./pkg/).",
            metavar="DIR",
        ),
    ] = None,
    targets_file: Annotated[
        Optional[Path],
        typer.Option(
            "--targets-file",
            help="YAML file with additional or overriding targets.",
            metavar="FILE",
            callback=parse_targets_file,
        ),
    ] = None,
    timeout: Annotated[
        Optional[float],
        typer.Option(
            "--timeout",
            help="Seconds to wait for each compiler invocation.",
            metavar="SECONDS",
            callback=parse_timeout,
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Print the planned commands and files without running anything.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose logging.",
        ),
    ] = False,
) -> None:
    """Generate code for TARGET from the .proto files below the source directory."""
    _configure_logging(verbose)

    source = require_non_empty(source, "-s/--source")
    destination = require_non_empty(destination, "-d/--destination")

    settings = Settings()

    try:
        config = GeneratorConfig(
            source=source or settings.source,
            destination=destination or settings.destination,
            target=get_target(target, _targets(targets_file or settings.targets_file)),
            extension=settings.extension,
        )
        plan = Generator(config).plan()

        if dry_run:
            _echo_plan(plan)
            return

        runner.ensure_binaries(plan.commands)
        runner.run_all(plan.commands, timeout=timeout or settings.timeout)
        io.write_files(plan.files)
    except ProtoplanError as e:
        logger.error(str(e))
        raise typer.Exit(code=1) from e

    logger.debug(
        f"Completed: {len(plan.commands)} command(s), {len(plan.files)} file(s)"
    )


@app.command()
def targets(
    targets_file: Annotated[
        Optional[Path],
        typer.Option(
            "--targets-file",
            help="YAML file with additional or overriding targets.",
            metavar="FILE",
            callback=parse_targets_file,
        ),
    ] = None,
) -> None:
    """List available targets and their argument templates."""
    try:
        table = _targets(targets_file or Settings().targets_file)
    except ProtoplanError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1) from e

    for name in sorted(table):
        entry = table[name]
        typer.echo(name)
        for template in entry.templates:
            typer.echo(f"  {template.purpose}: {template.format}")
        if entry.index is not None:
            typer.echo(f"  index: {entry.index.file_name}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
