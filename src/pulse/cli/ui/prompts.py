from __future__ import annotations

from rich.console import Console
from rich.prompt import Prompt

from pulse.core.models.enums import Familiarity, Hope, Role


def _ask_choice(prompt_text: str, choices: list[str], console: Console) -> str:
    console.print(f"[dim]Options: {', '.join(choices)}[/dim]")
    return Prompt.ask(prompt_text, choices=choices, console=console)


def _parse_hopes(raw: str) -> tuple[list[str], list[str]]:
    valid = {member.value for member in Hope}
    selected: list[str] = []
    unknown: list[str] = []
    for entry in raw.split(","):
        value = entry.strip()
        if not value:
            continue
        if value.isdigit() and 1 <= int(value) <= len(Hope):
            value = list(Hope)[int(value) - 1].value
        if value in valid:
            selected.append(value)
        else:
            unknown.append(value)
    return selected, unknown


def ask_hopes(console: Console) -> list[str]:
    """Prompt for one or more expected takeaways (names or numbers, comma-separated)."""
    for index, member in enumerate(Hope, start=1):
        console.print(f"[dim]{index}. {member.value} - {member.label}[/dim]")
    while True:
        raw = Prompt.ask("Expected takeaways (comma-separated)", default="", console=console)
        selected, unknown = _parse_hopes(raw)
        if unknown:
            console.print(f"[red]Unknown option(s): {', '.join(unknown)}.[/red]")
            continue
        if not selected:
            console.print("[red]Please select at least one option.[/red]")
            continue
        return selected


def ask_submission(
    console: Console,
    role: str | None = None,
    familiarity: str | None = None,
    hope: list[str] | None = None,
) -> dict[str, object]:
    """Fill in whichever answers were not given on the command line."""
    if role is None:
        role = _ask_choice("Primary role", [member.value for member in Role], console)
    if familiarity is None:
        familiarity = _ask_choice(
            "AI familiarity", [member.value for member in Familiarity], console
        )
    if not hope:
        hope = ask_hopes(console)
    return {"role": role, "familiarity": familiarity, "hope": list(hope)}
