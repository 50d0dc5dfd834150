from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.prompt import Confirm

from pulse.cli.storage import open_manager
from pulse.cli.ui.tables import render_sessions
from pulse.core.errors import ConfirmationRequired, PulseError


def list_command(data_dir: Path | None) -> None:
    console = Console()
    manager = open_manager(data_dir, console)
    render_sessions(manager.list_sessions(), console)


def new_command(data_dir: Path | None, force: bool) -> None:
    console = Console()
    manager = open_manager(data_dir, console)
    previous = manager.active_session_id()
    try:
        session = manager.start_new_session(force=force)
    except ConfirmationRequired as exc:
        if not Confirm.ask(exc.message, default=False, console=console):
            console.print("[yellow]Kept the current session.[/yellow]")
            return
        session = manager.start_new_session(force=True)
    except PulseError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    console.print(f"[dim]Archived {manager.display_name(previous)}.[/dim]")
    console.print(f"[green]Started {manager.display_name(session.id)} ({session.id}).[/green]")


def switch_command(data_dir: Path | None, session_id: str) -> None:
    console = Console()
    manager = open_manager(data_dir, console)
    try:
        session = manager.switch_session(session_id)
    except PulseError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    note = " (archived)" if session.archived else ""
    console.print(f"[green]Switched to {manager.display_name(session.id)}{note}.[/green]")


def delete_command(data_dir: Path | None, session_id: str, yes: bool) -> None:
    console = Console()
    manager = open_manager(data_dir, console)
    if not yes and not Confirm.ask(
        f"Delete session {session_id} and all of its responses? This cannot be undone.",
        default=False,
        console=console,
    ):
        console.print("[yellow]Nothing deleted.[/yellow]")
        return
    try:
        removed = manager.delete_session(session_id)
    except PulseError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    console.print(f"[green]Deleted session {session_id} ({removed} responses).[/green]")
