"""CLI app with deferred heavy imports."""

from pathlib import Path

import typer

app = typer.Typer(
    name="pulse",
    help="pulse - Workshop feedback survey and live results",
    no_args_is_help=True,
    add_completion=False,
)

sessions_app = typer.Typer(help="Manage survey sessions", no_args_is_help=True)

_DATA_DIR_HELP = "Directory holding survey data (default: $PULSE_DATA_DIR or the platform data dir)"


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    from pulse.logging import configure_logging

    configure_logging(verbose=verbose)


@app.command()
def submit(
    role: str | None = typer.Option(None, "--role", "-r"),
    familiarity: str | None = typer.Option(None, "--familiarity", "-f"),
    hope: list[str] | None = typer.Option(
        None, "--hope", help="Expected takeaway; repeat for several"
    ),
    no_interactive: bool = typer.Option(False, "--no-interactive"),
    data_dir: Path | None = typer.Option(None, "--data-dir", help=_DATA_DIR_HELP),
) -> None:
    """Record one survey response in the active session."""
    from pulse.cli.commands.submit import submit_command

    submit_command(
        data_dir=data_dir,
        role=role,
        familiarity=familiarity,
        hope=hope,
        no_interactive=no_interactive,
    )


@app.command("import")
def import_answers(
    answers: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False),
    data_dir: Path | None = typer.Option(None, "--data-dir", help=_DATA_DIR_HELP),
) -> None:
    """Record every response listed in a YAML answers file."""
    from pulse.cli.commands.submit import import_command

    import_command(answers=answers, data_dir=data_dir)


@app.command()
def dashboard(
    session: str | None = typer.Option(None, "--session", "-s", help="Session id (default: active)"),
    limit: int | None = typer.Option(None, "--limit", "-n", min=1, help="Show at most N responses"),
    watch: bool = typer.Option(False, "--watch", "-w", help="Keep refreshing until Ctrl+C"),
    interval: float = typer.Option(
        5.0, "--interval", min=0.5, help="Seconds between refreshes with --watch"
    ),
    data_dir: Path | None = typer.Option(None, "--data-dir", help=_DATA_DIR_HELP),
) -> None:
    """Show counts, percentages and the latest responses."""
    from pulse.cli.commands.dashboard import dashboard_command

    dashboard_command(
        data_dir=data_dir,
        session_id=session,
        limit=limit,
        watch=watch,
        interval=interval,
    )


@app.command()
def export(
    session: str | None = typer.Option(None, "--session", "-s", help="Session id (default: active)"),
    format: str = typer.Option("csv", "--format", "-F"),
    output: Path | None = typer.Option(None, "--output", "-o"),
    overwrite: bool = typer.Option(False, "--overwrite"),
    data_dir: Path | None = typer.Option(None, "--data-dir", help=_DATA_DIR_HELP),
) -> None:
    """Export a session as CSV, JSON or an HTML summary."""
    from pulse.cli.commands.export import export_command

    export_command(
        data_dir=data_dir,
        session_id=session,
        format=format,
        output_path=output,
        overwrite=overwrite,
    )


@sessions_app.command("list")
def sessions_list(
    data_dir: Path | None = typer.Option(None, "--data-dir", help=_DATA_DIR_HELP),
) -> None:
    from pulse.cli.commands.sessions import list_command

    list_command(data_dir=data_dir)


@sessions_app.command("new")
def sessions_new(
    force: bool = typer.Option(False, "--force", help="Start even if the current session is empty"),
    data_dir: Path | None = typer.Option(None, "--data-dir", help=_DATA_DIR_HELP),
) -> None:
    from pulse.cli.commands.sessions import new_command

    new_command(data_dir=data_dir, force=force)


@sessions_app.command("switch")
def sessions_switch(
    session_id: str = typer.Argument(...),
    data_dir: Path | None = typer.Option(None, "--data-dir", help=_DATA_DIR_HELP),
) -> None:
    from pulse.cli.commands.sessions import switch_command

    switch_command(data_dir=data_dir, session_id=session_id)


@sessions_app.command("delete")
def sessions_delete(
    session_id: str = typer.Argument(...),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
    data_dir: Path | None = typer.Option(None, "--data-dir", help=_DATA_DIR_HELP),
) -> None:
    from pulse.cli.commands.sessions import delete_command

    delete_command(data_dir=data_dir, session_id=session_id, yes=yes)


app.add_typer(sessions_app, name="sessions")
