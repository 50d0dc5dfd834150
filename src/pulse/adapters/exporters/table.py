"""Pure serializers shared by the exporters."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

import msgspec

from pulse.core.models.session import ResponseRecord, Session

TABLE_HEADER = ("Timestamp", "Primary Role", "AI Familiarity", "Expected Takeaways")

# Exports join with ";" so a hope value that contains a comma stays unambiguous.
EXPORT_HOPE_SEPARATOR = "; "
DISPLAY_HOPE_SEPARATOR = ", "


def format_timestamp(moment: datetime) -> str:
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def export_hope(record: ResponseRecord) -> str:
    return EXPORT_HOPE_SEPARATOR.join(hope.value for hope in record.hope)


def display_hope(record: ResponseRecord) -> str:
    return DISPLAY_HOPE_SEPARATOR.join(hope.value for hope in record.hope)


def to_table(responses: Iterable[ResponseRecord]) -> list[list[str]]:
    """Rows in column order timestamp, role, familiarity, hope."""
    return [
        [
            format_timestamp(record.timestamp),
            record.role.value,
            record.familiarity.value,
            export_hope(record),
        ]
        for record in responses
    ]


def to_document(session: Session) -> dict[str, Any]:
    """The session exactly as persisted, as plain JSON-compatible data."""
    return msgspec.to_builtins(session)
