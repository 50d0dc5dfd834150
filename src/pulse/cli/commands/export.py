from __future__ import annotations

from datetime import date
from pathlib import Path

import typer
from rich.console import Console

from pulse.adapters.exporters import CsvExporter, HtmlExporter, JsonExporter
from pulse.cli.storage import open_manager
from pulse.core.errors import PulseError
from pulse.core.utils import atomic_write_bytes

_EXPORTERS: dict[str, type[CsvExporter] | type[JsonExporter] | type[HtmlExporter]] = {
    "csv": CsvExporter,
    "json": JsonExporter,
    "html": HtmlExporter,
}


def export_command(
    data_dir: Path | None,
    session_id: str | None,
    format: str,
    output_path: Path | None,
    overwrite: bool,
) -> None:
    console = Console()
    exporter_cls = _EXPORTERS.get(format.lower())
    if exporter_cls is None:
        valid_formats = ", ".join(sorted(_EXPORTERS.keys()))
        console.print(f"[red]Unsupported format: {format}. Use one of: {valid_formats}.[/red]")
        raise typer.Exit(code=1)
    manager = open_manager(data_dir, console)
    try:
        session = manager.get_session(session_id)
    except PulseError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    if not session.responses:
        console.print("[yellow]No data to export.[/yellow]")
        raise typer.Exit(code=1)

    exporter = exporter_cls()
    content = exporter.generate(session)

    if output_path is None:
        output_path = Path.cwd() / exporter.filename_for(session, date.today())
    if output_path.exists():
        if output_path.is_dir():
            console.print("[red]Output path is a directory.[/red]")
            raise typer.Exit(code=1)
        if not overwrite:
            console.print("[red]Output file already exists. Use --overwrite to replace.[/red]")
            raise typer.Exit(code=1)
    if not output_path.parent.exists() or not output_path.parent.is_dir():
        console.print("[red]Output directory does not exist.[/red]")
        raise typer.Exit(code=1)
    atomic_write_bytes(output_path, content)
    console.print(f"[green]Exported {len(session.responses)} responses to {output_path}[/green]")
