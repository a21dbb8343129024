"""Rich table and JSON summary for a cleanup run."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from isa_cleanup.pipelines.runner import PipelineResult


def render_run_table(result: PipelineResult, console: Console | None = None) -> None:
    """Print a Rich table with one row per transform stage."""
    if console is None:
        console = Console()

    table = Table(title="Instruction-set cleanup")
    table.add_column("Transform")
    table.add_column("Records", justify="right")
    table.add_column("Modified", justify="right")
    table.add_column("Errors", justify="right")
    table.add_column("Status")

    for stage in result.stage_log:
        n_errors = len(stage["errors"])
        records = str(stage["records_after"])
        if stage["records_after"] != stage["records_before"]:
            records = f"{stage['records_before']} -> {stage['records_after']}"
        table.add_row(
            stage["stage"],
            records,
            str(stage["records_modified"]),
            str(n_errors),
            "[green]OK[/green]" if n_errors == 0 else "[red]FAIL[/red]",
        )

    console.print(table)

    if result.stopped_early:
        console.print("[yellow]Stopped after the first failing transform (fail-fast).[/yellow]")
    if result.last_error is not None:
        console.print(f"[bold red]Last error:[/bold red] {escape(result.last_error.describe())}")


def run_to_json(result: PipelineResult) -> dict:
    """Convert a PipelineResult to a JSON-serializable dict (without the document)."""
    return {
        "ok": result.ok,
        "stopped_early": result.stopped_early,
        "record_count": len(result.document),
        "stages": result.stage_log,
        "errors": [
            {
                "kind": e.kind.value,
                "transform": e.transform,
                "record_index": e.record_index,
                "mnemonic": e.mnemonic,
                "message": e.message,
            }
            for e in result.errors
        ],
        "last_error": result.last_error.describe() if result.last_error else None,
    }
