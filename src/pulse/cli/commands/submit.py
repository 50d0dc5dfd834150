from __future__ import annotations

from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from pulse.cli.storage import open_manager
from pulse.cli.ui.prompts import ask_submission
from pulse.core.errors import InvalidSubmission, PulseError
from pulse.logging import get_logger

log = get_logger(__name__)


def _load_answers(path: Path) -> list[Any]:
    yaml = YAML(typ="safe")
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.load(handle)
    except (OSError, YAMLError) as exc:
        raise ValueError("Failed to read answers file.") from exc
    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get("responses", [])
    if not isinstance(data, list):
        raise ValueError("Answers file must contain a list of responses.")
    return data


def submit_command(
    data_dir: Path | None,
    role: str | None,
    familiarity: str | None,
    hope: list[str] | None,
    no_interactive: bool,
) -> None:
    console = Console()
    manager = open_manager(data_dir, console)
    if no_interactive:
        raw: dict[str, object] = {"role": role, "familiarity": familiarity, "hope": hope or []}
    else:
        raw = ask_submission(console, role=role, familiarity=familiarity, hope=hope)
    try:
        record = manager.record_response(raw)
    except InvalidSubmission as exc:
        console.print("[red]Submission is not valid:[/red]")
        for issue in exc.issues:
            console.print(f"- {issue.path or 'submission'}: {issue.message}")
        raise typer.Exit(code=1) from exc
    except PulseError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    console.print(
        f"[green]Thank you! Response recorded in {manager.display_name(record.session_id)}.[/green]"
    )


def import_command(answers: Path, data_dir: Path | None) -> None:
    console = Console()
    try:
        entries = _load_answers(answers)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    manager = open_manager(data_dir, console)
    recorded = 0
    skipped = 0
    for index, entry in enumerate(entries, start=1):
        if not isinstance(entry, dict):
            skipped += 1
            console.print(f"[yellow]Skipped entry {index}: not a mapping[/yellow]")
            continue
        try:
            manager.record_response(entry)
        except InvalidSubmission as exc:
            skipped += 1
            details = "; ".join(f"{i.path or 'submission'}: {i.message}" for i in exc.issues)
            console.print(f"[yellow]Skipped entry {index}: {details}[/yellow]")
            continue
        except PulseError as exc:
            console.print(f"[red]{exc} Stopped after {recorded} responses.[/red]")
            raise typer.Exit(code=1) from exc
        recorded += 1
    log.info("responses_imported", path=str(answers), recorded=recorded, skipped=skipped)
    console.print(f"[green]Imported {recorded} responses ({skipped} skipped).[/green]")
    if skipped and not recorded:
        raise typer.Exit(code=1)
