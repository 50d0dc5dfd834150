from __future__ import annotations

from functools import lru_cache
from importlib import resources
from pathlib import Path

from jinja2 import Environment, Template, select_autoescape

from pulse.adapters.exporters.base import ExporterBase
from pulse.adapters.exporters.table import display_hope, format_timestamp
from pulse.core.aggregator import summarize_all
from pulse.core.identity import session_display_name
from pulse.core.models.session import Session


class HtmlExporter(ExporterBase):
    content_type = "text/html"
    file_extension = "html"
    filename_stem = "workshop-summary"

    def __init__(self, template_path: Path | None = None) -> None:
        """Initialize the HTML exporter.

        Args:
            template_path: Optional path to a custom Jinja2 template.
                          If None, uses the built-in summary template.
        """
        self._custom_template_path = template_path

    @staticmethod
    @lru_cache(maxsize=1)
    def _default_template() -> Template:
        template_text = (
            resources.files("pulse.templates.reports")
            .joinpath("summary.html.j2")
            .read_text(encoding="utf-8")
        )
        env = Environment(autoescape=select_autoescape(default_for_string=True))
        return env.from_string(template_text)

    def _get_template(self) -> Template:
        if self._custom_template_path:
            template_text = self._custom_template_path.read_text(encoding="utf-8")
            env = Environment(autoescape=select_autoescape(default_for_string=True))
            return env.from_string(template_text)
        return self._default_template()

    def generate(self, session: Session) -> bytes:
        template = self._get_template()
        total = len(session.responses)
        rows = [
            {
                "number": total - index,
                "timestamp": format_timestamp(record.timestamp),
                "role": record.role.label,
                "familiarity": record.familiarity.label,
                "hope": display_hope(record),
            }
            for index, record in enumerate(reversed(session.responses))
        ]
        rendered = template.render(
            session=session,
            title=session_display_name(session.id),
            started=format_timestamp(session.start_time),
            archived_at=format_timestamp(session.archived_at) if session.archived_at else None,
            total=total,
            summaries=list(summarize_all(session.responses).values()),
            rows=rows,
        )
        return rendered.encode("utf-8")
