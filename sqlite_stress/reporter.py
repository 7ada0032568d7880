from __future__ import annotations

from typing import Any, Dict

from rich import box
from rich.console import Console
from rich.table import Table

from sqlite_stress.workers.abstract import Operation


def print_summary(summary: Dict[str, Any], console: Console | None = None) -> None:
    """
    Render a finished harness run as a rich table, one row per worker.

    Faulted workers show the fault type and the operation it interrupted;
    the caption carries the run totals from the profiler.
    """
    console = console or Console()
    outcomes = summary.get("outcomes") or []

    if not outcomes:
        console.print("[yellow]No workers ran.[/yellow]")
        return

    table = Table(
        title="SQLite Stress Run",
        box=box.ROUNDED,
        caption=(
            f"{summary.get('duration_seconds', 0.0):.1f}s │ "
            f"{summary.get('operations_per_sec', 0.0):,.2f} ops/s │ "
            f"db={summary.get('db_path', '?')}"
        ),
    )

    table.add_column("Worker", style="cyan", no_wrap=True, justify="right")
    table.add_column("Iterations", justify="right", style="magenta")
    for op in Operation:
        table.add_column(op.value, justify="right", style="green")
    table.add_column("Status", style="bold")

    for outcome in outcomes:
        counts = outcome.get("operations", {})
        if outcome.get("fault") is None:
            status = "[green]completed[/green]"
        else:
            status = (
                f"[red]{outcome.get('fault_type')}[/red] "
                f"during {outcome.get('failed_operation') or '?'}"
            )
        table.add_row(
            str(outcome.get("worker_id", "?")),
            f"{outcome.get('iterations', 0):,}",
            *(f"{counts.get(op.value, 0):,}" for op in Operation),
            status,
        )

    console.print(table)

    mem_bytes = summary.get("peak_rss_bytes") or 0
    cpu = summary.get("cpu_percent") or 0.0
    console.print(
        f"[dim]Peak memory {mem_bytes / (1024 * 1024):.2f} MB │ CPU {cpu:.1f}%[/dim]"
    )
