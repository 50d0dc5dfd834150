from __future__ import annotations

import time
from pathlib import Path

import typer
from rich.console import Console, Group
from rich.live import Live

from pulse.cli.storage import open_manager
from pulse.cli.ui.tables import dashboard_view
from pulse.core.errors import PulseError
from pulse.core.lifecycle import SessionManager
from pulse.logging import get_logger

log = get_logger(__name__)

_sleep = time.sleep


def _current_view(manager: SessionManager, session_id: str | None, limit: int | None) -> Group:
    overview = manager.overview(session_id)
    summaries = manager.summaries(overview.session.id)
    recent = manager.recent_responses(overview.session.id, limit=limit)
    return dashboard_view(overview, summaries, recent)


def _watch(
    manager: SessionManager,
    console: Console,
    session_id: str | None,
    limit: int | None,
    interval: float,
) -> None:
    """Redraw the dashboard from storage every ``interval`` seconds until interrupted."""
    refreshes = 1
    with Live(_current_view(manager, session_id, limit), console=console, auto_refresh=False) as live:
        try:
            while True:
                _sleep(interval)
                live.update(_current_view(manager, session_id, limit), refresh=True)
                refreshes += 1
        except KeyboardInterrupt:
            log.debug("dashboard_watch_stopped", refreshes=refreshes)


def dashboard_command(
    data_dir: Path | None,
    session_id: str | None,
    limit: int | None,
    watch: bool = False,
    interval: float = 5.0,
) -> None:
    console = Console()
    manager = open_manager(data_dir, console)
    try:
        if watch:
            _watch(manager, console, session_id, limit, interval)
        else:
            console.print(_current_view(manager, session_id, limit))
    except PulseError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
