from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from pulse.adapters.storage.file_store import FileStorage
from pulse.config import data_dir
from pulse.core.errors import PulseError
from pulse.core.lifecycle import SessionManager


def open_manager(directory: Path | None, console: Console) -> SessionManager:
    base_dir = data_dir(directory)
    if base_dir.exists() and not base_dir.is_dir():
        console.print(f"[red]Data directory is not a directory: {base_dir}[/red]")
        raise typer.Exit(code=1)
    try:
        storage = FileStorage(base_dir)
    except OSError as exc:
        console.print(f"[red]Cannot open data directory {base_dir}: {exc}[/red]")
        raise typer.Exit(code=1) from exc
    manager = SessionManager(storage)
    try:
        manager.bootstrap()
    except PulseError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    return manager
