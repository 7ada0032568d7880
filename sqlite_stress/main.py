from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer

from sqlite_stress.config import Settings, get_settings
from sqlite_stress.orchestrator import run_harness
from sqlite_stress.reporter import print_summary
from sqlite_stress.utils.logging import configure_logging

app = typer.Typer(help="SQLite concurrent-writer stress harness.")


def _effective_settings(
    workers: Optional[int],
    iterations: Optional[int],
    db: Optional[Path],
) -> Settings:
    settings = get_settings()
    overrides = {}
    if workers is not None:
        overrides["worker_count"] = workers
    if iterations is not None:
        overrides["max_iterations"] = iterations
    if db is not None:
        overrides["db_path"] = str(db)
    return settings.model_copy(update=overrides) if overrides else settings


@app.callback(invoke_without_command=True)
def default(ctx: typer.Context) -> None:
    """
    Run the harness with its defaults when no command is given.
    """
    if ctx.invoked_subcommand is None:
        run(workers=None, iterations=None, db=None, seed=None)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"env={settings.app_env} | DB={settings.db_path} (timeout={settings.db_timeout_seconds}s) | "
        f"workers={settings.worker_count} iterations={settings.max_iterations or 'unbounded'} "
        f"window={settings.select_window_seconds}s delete=1/{settings.delete_one_in}"
    )


@app.command()
def run(
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        min=1,
        help="Override number of concurrent workers (default from settings).",
    ),
    iterations: Optional[int] = typer.Option(
        None,
        "--iterations",
        "-n",
        min=1,
        help="Stop each worker after this many cycles (default: loop until fault).",
    ),
    db: Optional[Path] = typer.Option(
        None,
        "--db",
        help="Override the backing store file.",
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        help="Base RNG seed; worker i uses seed + i.",
    ),
) -> None:
    """
    Start the workers and block until they all stop.
    """
    settings = _effective_settings(workers, iterations, db)
    configure_logging(level=settings.log_level, json_logs=settings.log_json)

    try:
        summary = run_harness(settings, seed=seed)
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        raise typer.Exit(code=130)
    print_summary(summary)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
