"""Clocks, record ids and session ids."""

from __future__ import annotations

import itertools
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from uuid import uuid4

Clock = Callable[[], datetime]
IdFactory = Callable[[], str]

SESSION_ID_FORMAT = "%Y%m%d-%H%M%S"


def utc_now() -> datetime:
    return datetime.now(UTC)


def uuid_ids() -> str:
    return uuid4().hex


class SequentialIds:
    """Monotonic id factory, handy when record ids must be predictable."""

    def __init__(self, prefix: str = "resp", start: int = 1) -> None:
        self._prefix = prefix
        self._counter = itertools.count(start)

    def __call__(self) -> str:
        return f"{self._prefix}-{next(self._counter):06d}"


def session_id_for(instant: datetime) -> str:
    """Build a session id whose lexical order matches chronological order.

    Example: ``2024-10-19T14:30:05.123Z`` becomes ``20241019-143005-123``.
    """
    instant = instant.astimezone(UTC)
    return f"{instant.strftime(SESSION_ID_FORMAT)}-{instant.microsecond // 1000:03d}"


def next_session_instant(instant: datetime) -> datetime:
    return instant + timedelta(milliseconds=1)


def parse_session_id(session_id: str) -> datetime | None:
    stamp, _, millis = session_id.rpartition("-")
    if not stamp or not millis.isdigit() or len(millis) != 3:
        return None
    try:
        parsed = datetime.strptime(stamp, SESSION_ID_FORMAT)
    except ValueError:
        return None
    return parsed.replace(tzinfo=UTC, microsecond=int(millis) * 1000)


def session_display_name(session_id: str) -> str:
    """Human label for a session, e.g. ``Session Oct 19, 2024 14:30:05``."""
    started = parse_session_id(session_id)
    if started is None:
        return f"Session {session_id}"
    return f"Session {started.strftime('%b')} {started.day}, {started.year} {started.strftime('%H:%M:%S')}"
