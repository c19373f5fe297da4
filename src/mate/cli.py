"""Typer-based CLI for mate."""

import logging
from contextlib import contextmanager
from datetime import timedelta
from typing import Iterator, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import MateConfig
from .errors import (
    AlreadyWorkingError,
    CorruptionError,
    NoHistoryError,
    NoPreviousTicketError,
    StorageError,
)
from .ledger import Ledger
from .models.ledger import STOP_TOKEN
from .report import build_day_info, format_duration, ordered_totals
from .segments import compute_segments
from .session import SessionController, session_status

app = typer.Typer(
    name="mate",
    help="mate - Track time spent on tickets",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()
logger = logging.getLogger(__name__)

START_HINT = '  $ mate start "Ticket title"'


@app.callback()
def main_callback(
    ctx: typer.Context,
    ledger_path: str = typer.Option(
        None,
        "--ledger",
        help="Path to ledger file (default: MATE_LEDGER env, config file, or ~/.mate.csv)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable debug logging",
    ),
):
    """Record start/stop events for tickets and report time spent."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        ctx.obj = MateConfig.from_env(cli_ledger_path=ledger_path)
    except ValueError as e:
        console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        raise typer.Exit(code=2)


def _controller(ctx: typer.Context) -> SessionController:
    config: MateConfig = ctx.obj
    return SessionController(Ledger(config.ledger_path))


@contextmanager
def _handle_errors() -> Iterator[None]:
    """Map mate errors to messages and exit codes."""
    try:
        yield
    except NoHistoryError:
        console.print("No entry saved for now. Run:")
        console.print(START_HINT)
        raise typer.Exit(code=1)
    except NoPreviousTicketError:
        console.print("Can not find a previous ticket to restart. Run:")
        console.print(START_HINT)
        raise typer.Exit(code=1)
    except AlreadyWorkingError as e:
        console.print(f"You are currently working on: {escape(e.title)}")
        raise typer.Exit(code=1)
    except (StorageError, CorruptionError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=2)


@app.command("start")
def start(
    ctx: typer.Context,
    title: Optional[str] = typer.Argument(
        None,
        help="Ticket title (use quotes for long titles); omit to resume the last ticket",
    ),
):
    """Start working on a ticket, or resume the last stopped one."""
    controller = _controller(ctx)

    if title is not None:
        if not title.strip():
            console.print("[red]Error: Ticket title cannot be empty[/red]")
            raise typer.Exit(code=1)
        if title == STOP_TOKEN:
            console.print(f"[red]Error: '{STOP_TOKEN}' is reserved and cannot be used as a title[/red]")
            raise typer.Exit(code=1)

    with _handle_errors():
        if title is None:
            title = controller.resume_last()
        else:
            controller.start(title)

    console.print(f"STARTING {escape(title)}")


@app.command("stop")
def stop(ctx: typer.Context):
    """Stop the ticket currently being worked on."""
    controller = _controller(ctx)

    with _handle_errors():
        stopped = controller.stop()

    if stopped is None:
        console.print("Not currently working on a ticket. Run:")
        console.print('  $ mate start ["Ticket title"]')
        return

    console.print(f"STOPPING {escape(stopped)}")


@app.command("log")
def log(ctx: typer.Context):
    """Show the total time spent per ticket."""
    controller = _controller(ctx)

    with _handle_errors():
        totals = ordered_totals(controller.segments())

    if not totals:
        console.print("Nothing to show (yet)")
        return

    table = Table(title="Time per ticket")
    table.add_column("Ticket", style="cyan")
    table.add_column("Time", justify="right", style="magenta")
    for title, duration in totals:
        table.add_row(escape(title), format_duration(duration))

    console.print(table)


@app.command("list")
def list_entries(ctx: typer.Context):
    """List every entry with its duration, sessions separated by '---'."""
    controller = _controller(ctx)

    with _handle_errors():
        segments = controller.segments()

    if not segments:
        console.print("Nothing to show (yet)")
        return

    for segment in segments:
        if segment.title == STOP_TOKEN:
            console.print("[dim]---[/dim]")
        else:
            console.print(f"{escape(segment.title)}\t{format_duration(segment.duration)}")


@app.command("info")
def info(ctx: typer.Context):
    """Show the current ticket and the time left against the daily target."""
    config: MateConfig = ctx.obj
    ledger = Ledger(config.ledger_path)

    with _handle_errors():
        events = ledger.read_all()

    day = build_day_info(
        compute_segments(events, ledger.clock()),
        session_status(events),
        config.work_day,
    )

    if day.working:
        console.print(f"Working on {escape(day.status)} ({format_duration(day.current_total)})")
    else:
        console.print("Currently not working")

    if day.remaining > timedelta():
        console.print(f"Still {format_duration(day.remaining)} to work")
    else:
        console.print(f"You're done for today (+{format_duration(-day.remaining)})")


@app.command("clear")
def clear(
    ctx: typer.Context,
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Do not ask for confirmation",
    ),
):
    """Empty all entries in the ledger."""
    config: MateConfig = ctx.obj
    ledger = Ledger(config.ledger_path)

    if not yes and not typer.confirm("Empty all entries in the database?", default=False):
        console.print("Command canceled")
        return

    with _handle_errors():
        ledger.clear()

    console.print("Database cleared")


@app.command("version")
def version():
    """Show mate version."""
    from . import __version__
    console.print(f"mate v{__version__}")


# Short aliases
app.command("s", hidden=True)(start)
app.command("x", hidden=True)(stop)
app.command("l", hidden=True)(log)
app.command("ll", hidden=True)(list_entries)
app.command("i", hidden=True)(info)


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
