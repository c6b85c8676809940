"""CLI commands."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console

if TYPE_CHECKING:
    from hbt.config import Config

app = typer.Typer(
    name="hbt",
    help="Habit tracker - manage habits grouped by category.",
    no_args_is_help=False,
)
console = Console()

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _get_config() -> Config:
    """Lazy import and load config."""
    from hbt.config import Config

    return Config.load()


def configure_logging(cfg: Config) -> None:
    """Send hbt logs to the configured file; stay silent otherwise.

    Logging to the terminal would tear the live display, so there is no
    console handler.
    """
    root = logging.getLogger("hbt")
    if not cfg.log_file:
        root.addHandler(logging.NullHandler())
        return

    log_path = Path(cfg.log_file).expanduser()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_path)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(str(cfg.log_level).upper())


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    db: Annotated[Path | None, typer.Option("--db", help="SQLite database path")] = None,
    log_file: Annotated[
        Path | None, typer.Option("--log-file", help="Write debug logs to this file")
    ] = None,
):
    """Launch the habits view if no command given."""
    cfg = _get_config()
    if db is not None:
        cfg.override("database", str(db))
    if log_file is not None:
        cfg.override("log_file", str(log_file))
        cfg.override("log_level", "DEBUG")
    configure_logging(cfg)
    ctx.obj = cfg

    if ctx.invoked_subcommand is None:
        from hbt.ui.interactive import interactive_menu

        try:
            interactive_menu(cfg)
        except sqlite3.Error as e:
            console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(1)


@app.command()
def seed(ctx: typer.Context):
    """Insert demo categories and habits (existing names are skipped)."""
    from hbt.core import create_backend, seed_demo_data

    cfg: Config = ctx.obj
    try:
        backend = create_backend(cfg)
        cats, habits = seed_demo_data(backend)
    except sqlite3.Error as e:
        console.print(f"[red]Error seeding data:[/red] {e}")
        raise typer.Exit(1)

    backend.close()
    console.print(
        f"[green]✓[/green] Test data seeded: {cats} categories, {habits} habits "
        f"[dim]({cfg.database_path})[/dim]"
    )


@app.command(name="ls")
@app.command(name="list")
def list_habits(ctx: typer.Context):
    """Print habits grouped by category."""
    from hbt.core import CategoryService, HabitService, create_backend
    from hbt.ui.habits_tab import HabitsTabState
    from hbt.ui.habits_view import render_list_content
    from hbt.ui.theme import Theme

    cfg: Config = ctx.obj
    try:
        backend = create_backend(cfg)
        habits = HabitService(backend).list()
        categories = CategoryService(backend).list()
    except sqlite3.Error as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    backend.close()
    # cursor=-1 so no line is marked as selected
    state = HabitsTabState(habits=tuple(habits), categories=tuple(categories), cursor=-1)
    console.print(render_list_content(state, Theme(), hints=False))


@app.command()
def config(
    ctx: typer.Context,
    key: Annotated[str | None, typer.Argument(help="Setting to change")] = None,
    value: Annotated[str | None, typer.Argument(help="New value")] = None,
):
    """Show effective configuration, or persist one setting (hbt config KEY VALUE)."""
    cfg: Config = ctx.obj
    if key is not None:
        if value is None:
            console.print(f"[red]Error:[/red] Missing value for {key}")
            raise typer.Exit(1)
        try:
            parsed = cfg.parse(key, value)
        except (KeyError, ValueError) as e:
            console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(1)
        cfg.set(key, parsed)
        console.print(f"[green]✓[/green] {key} = {parsed!r}")
        return

    console.print(f"[bold]Config dir:[/bold] {cfg.config_dir}")
    console.print(f"[bold]Database:[/bold]   {cfg.database_path}")
    console.print()
    for key, desc, value in cfg.get_settings():
        console.print(f"  [cyan]{key}[/cyan] = {value!r}  [dim]{desc}[/dim]")
