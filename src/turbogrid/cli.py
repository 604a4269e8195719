"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
from pathlib import Path
from typing import Optional

import typer
from jsonschema import ValidationError
from rich.console import Console
from rich.table import Table

from .app import GridSession, load_settings, open_demo_session
from .errors import SettingsError, TurboGridError
from .settings.manager import default_settings_path
from .utils.logging import setup_logging

app = typer.Typer(help="Browse an on-demand grid of up to a billion rows and columns")
console = Console()


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ValidationError as exc:
            typer.echo(f"Error: invalid settings: {exc.message}", err=True)
            raise typer.Exit(1) from exc
        except SettingsError as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc
        except TurboGridError as exc:
            typer.echo(f"Unexpected error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


def _render(session: GridSession, first_row: int, count: int) -> Table:
    controller = session.controller
    snapshot = controller.snapshot()
    dims = controller.dimensions
    table = Table(
        title=(
            f"Grid: {dims.total_rows}R x {dims.total_cols}C  "
            f"(columns {snapshot.window_start}..{snapshot.window_start + snapshot.window_width - 1})"
        )
    )
    table.add_column("#", justify="right", style="dim")
    for label in snapshot.headers:
        table.add_column(label, style="green", header_style="bold green")

    last_row = min(first_row + count, dims.total_rows)
    for index in range(first_row, last_row):
        row = snapshot.row(index)
        if row is None:
            table.add_row(str(index), f"[dim]Loading row {index}...[/dim]")
            continue
        table.add_row(str(index), *row.contents)
    return table


@app.command()
@_handle_errors
def show(
    row: int = typer.Option(0, help="First row to display"),
    col: int = typer.Option(0, help="First column to display (clamped into the grid)"),
    count: int = typer.Option(10, min=1, help="Number of rows to display"),
    rows: Optional[int] = typer.Option(None, help="Total rows of the demo grid"),
    cols: Optional[int] = typer.Option(None, help="Total columns of the demo grid"),
    width: Optional[int] = typer.Option(None, min=1, help="Visible column count"),
    page_size: Optional[int] = typer.Option(None, min=1, help="Rows fetched per request"),
    latency: Optional[float] = typer.Option(None, min=0.0, help="Simulated engine latency in seconds"),
    settings: Optional[Path] = typer.Option(
        None, exists=True, dir_okay=False, help="Settings JSON file (default: see settings-path)"
    ),
    timeout: int = typer.Option(10000, min=1, help="Milliseconds to wait for data"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log fetch activity"),
) -> None:
    """Print a window of the demo grid."""

    setup_logging(verbose)
    session = open_demo_session(
        settings=load_settings(settings),
        total_rows=rows,
        total_cols=cols,
        latency=latency,
        visible_cols=width,
        rows_per_page=page_size,
    )
    try:
        controller = session.controller
        first = controller.jump_to(row=row, col=col)
        if first is not None:
            controller.on_rows_visible(first, first + count - 1)
        if not session.settle(timeout):
            console.print("[yellow]Timed out waiting for the grid engine[/yellow]")
        console.print(_render(session, first or 0, count))
    finally:
        session.close()


@app.command()
@_handle_errors
def headers(
    col: int = typer.Option(0, help="First column"),
    cols: Optional[int] = typer.Option(None, help="Total columns of the demo grid"),
    width: Optional[int] = typer.Option(None, min=1, help="Visible column count"),
    settings: Optional[Path] = typer.Option(
        None, exists=True, dir_okay=False, help="Settings JSON file (default: see settings-path)"
    ),
) -> None:
    """Print the column labels of one window."""

    setup_logging(False)
    session = open_demo_session(
        settings=load_settings(settings),
        total_cols=cols,
        visible_cols=width,
    )
    try:
        session.controller.jump_to_column(col)
        session.settle()
        snapshot = session.controller.snapshot()
        console.print(f"{snapshot.window_start}: " + " ".join(snapshot.headers))
    finally:
        session.close()


@app.command("settings-path")
def settings_path() -> None:
    """Print where the settings file lives on this platform."""

    typer.echo(str(default_settings_path()))


if __name__ == "__main__":  # pragma: no cover
    app()
