"""CLI entry point using Typer."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(name="isa-cleanup", help="x86 instruction-set operand cleanup")


@app.command("run")
def run(
    input_path: Path = typer.Argument(..., help="Instruction-set JSON to clean up"),
    output_path: Path = typer.Argument(..., help="Where to write the cleaned-up JSON"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="JSON config file"),
    only: Optional[list[str]] = typer.Option(None, "--only", help="Run only this transform (repeatable)"),
    skip: Optional[list[str]] = typer.Option(None, "--skip", help="Skip this transform (repeatable)"),
    fail_fast: bool = typer.Option(False, "--fail-fast", help="Stop at the first failing transform"),
    log_level: Optional[str] = typer.Option(None, help="Log level (DEBUG, INFO, ...)"),
    log_file: Optional[Path] = typer.Option(None, help="Also write logs to this file"),
    json_output: bool = typer.Option(False, "--json", help="Print the run summary as JSON and serialize log records"),
) -> None:
    """Load a database, run the cleanup transforms and save the result.

    The output is written even when a transform reports errors; the exit
    code is 1 in that case.
    """
    import json

    from isa_cleanup.config import CleanupConfig, load_config, merge_cli_overrides
    from isa_cleanup.core.status import ConfigError, TransformRegistrationError
    from isa_cleanup.pipelines.default import cleanup_file
    from isa_cleanup.reports.render_run import render_run_table, run_to_json
    from isa_cleanup.utils.logging import setup_logging

    try:
        config = load_config(config_path) if config_path else CleanupConfig()
        config = merge_cli_overrides(
            config,
            only=only,
            skip=skip,
            fail_fast=True if fail_fast else None,
            log_level=log_level,
        )
    except ConfigError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=2)

    setup_logging(level=config.log_level, log_file=log_file, json_output=json_output)

    try:
        result = cleanup_file(input_path, output_path, config=config)
    except TransformRegistrationError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=2)
    except (OSError, ValueError) as e:
        typer.echo(f"Cannot load {input_path}: {e}", err=True)
        raise typer.Exit(code=2)

    if json_output:
        typer.echo(json.dumps(run_to_json(result), indent=2, default=str))
    else:
        render_run_table(result)
        typer.echo(f"Written to {output_path}")

    if not result.ok:
        raise typer.Exit(code=1)


@app.command("list-transforms")
def list_transforms() -> None:
    """List the registered transforms in run order."""
    from rich.console import Console
    from rich.table import Table

    from isa_cleanup.pipelines.default import default_registry

    table = Table(title="Registered transforms")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Priority", justify="right")
    table.add_column("Name", no_wrap=True)
    table.add_column("Description", style="dim")
    for i, entry in enumerate(default_registry().all_by_priority(), 1):
        table.add_row(str(i), str(entry.priority), entry.name, entry.transform.describe())
    Console().print(table)


if __name__ == "__main__":
    app()
