from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from rich.console import Console, Group, RenderableType
from rich.table import Table
from rich.text import Text

from pulse.adapters.exporters.table import display_hope, format_timestamp
from pulse.core.aggregator import FieldSummary
from pulse.core.lifecycle import SessionOverview
from pulse.core.models.enums import SurveyField
from pulse.core.models.session import ResponseRecord, SessionSummary
from pulse.core.utils import format_elapsed, format_time_ago


def overview_view(overview: SessionOverview) -> Group:
    session = overview.session
    status = "archived" if session.archived else "open"
    last = format_time_ago(overview.last_response_at) if overview.last_response_at else "--"
    return Group(
        Text.from_markup(f"[bold]{overview.display_name}[/bold] [dim]({session.id}, {status})[/dim]"),
        Text.from_markup(
            f"Total responses: [bold]{overview.total}[/bold]   "
            f"Last response: {last}   "
            f"Session time: {format_elapsed(overview.elapsed)}"
        ),
    )


def field_summary_view(summary: FieldSummary) -> RenderableType:
    if summary.is_empty:
        return Text.from_markup(f"[bold]{summary.field.heading}[/bold]: [dim]No data yet[/dim]")
    table = Table(title=summary.field.heading)
    table.add_column("Answer")
    table.add_column("Count", justify="right")
    table.add_column("Share", justify="right")
    for bucket in summary.buckets:
        table.add_row(bucket.label, str(bucket.count), f"{bucket.percentage:.1f}%")
    return table


def responses_view(responses: Sequence[ResponseRecord], total: int) -> RenderableType:
    """Table of responses that are already ordered most recent first."""
    if not responses:
        return Text.from_markup(
            "[dim]No responses yet. Responses appear here as participants submit.[/dim]"
        )
    table = Table(title="Latest Responses")
    table.add_column("#", justify="right")
    table.add_column("Time")
    table.add_column("Primary Role")
    table.add_column("AI Familiarity")
    table.add_column("Expected Takeaways")
    for index, record in enumerate(responses):
        table.add_row(
            str(total - index),
            format_timestamp(record.timestamp),
            record.role.label,
            record.familiarity.label,
            display_hope(record),
        )
    return table


def dashboard_view(
    overview: SessionOverview,
    summaries: Mapping[SurveyField, FieldSummary],
    recent: Sequence[ResponseRecord],
) -> Group:
    return Group(
        overview_view(overview),
        *(field_summary_view(summaries[field]) for field in SurveyField),
        responses_view(recent, overview.total),
    )


def render_sessions(sessions: Iterable[SessionSummary], console: Console) -> None:
    table = Table(title="Sessions")
    table.add_column("ID", no_wrap=True)
    table.add_column("Name")
    table.add_column("Responses", justify="right")
    table.add_column("Status")
    for summary in sessions:
        if summary.active:
            status = "[green]active[/green]"
            if summary.archived:
                status += " (archived)"
        elif summary.archived:
            status = "archived"
        else:
            status = "open"
        table.add_row(summary.id, summary.display_name, str(summary.response_count), status)
    console.print(table)
