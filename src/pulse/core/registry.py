from __future__ import annotations

from datetime import datetime

import structlog
from msgspec import DecodeError

from pulse.core.errors import (
    ActiveSessionDeletionForbidden,
    CorruptRegion,
    DuplicateSession,
    SessionNotFound,
)
from pulse.core.models.session import ResponseRecord, Session, decode_sessions, encode_sessions
from pulse.core.protocols import Region, StoragePort

log: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


class SessionRegistry:
    """Session metadata plus each session's embedded response list."""

    def __init__(self, storage: StoragePort) -> None:
        self._storage = storage

    def _load(self) -> dict[str, Session]:
        data = self._storage.get(Region.SESSIONS)
        if not data:
            return {}
        try:
            return decode_sessions(data)
        except (DecodeError, ValueError, TypeError) as exc:
            log.error("sessions_unreadable", region=Region.SESSIONS.value, error=str(exc))
            raise CorruptRegion(Region.SESSIONS.value, str(exc)) from exc

    def _save(self, sessions: dict[str, Session]) -> None:
        self._storage.set(Region.SESSIONS, encode_sessions(sessions))

    def create(self, session_id: str, start_time: datetime) -> Session:
        sessions = self._load()
        if session_id in sessions:
            raise DuplicateSession(session_id)
        session = Session(id=session_id, start_time=start_time)
        sessions[session_id] = session
        self._save(sessions)
        return session

    def exists(self, session_id: str) -> bool:
        return session_id in self._load()

    def get(self, session_id: str) -> Session:
        session = self._load().get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        return session

    def list_all(self) -> list[Session]:
        return list(self._load().values())

    def append_response(self, session_id: str, record: ResponseRecord) -> Session:
        sessions = self._load()
        session = sessions.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        session.responses.append(record)
        session.last_updated = record.timestamp
        self._save(sessions)
        return session

    def archive(self, session_id: str, archived_at: datetime) -> Session:
        """Mark a session archived.

        Archiving an already archived session keeps its original
        ``archived_at``.
        """
        sessions = self._load()
        session = sessions.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        if session.archived:
            log.debug("session_already_archived", session_id=session_id)
            return session
        session.archived = True
        session.archived_at = archived_at
        self._save(sessions)
        return session

    def delete(self, session_id: str, active_id: str | None = None) -> Session:
        if session_id == active_id:
            raise ActiveSessionDeletionForbidden(session_id)
        sessions = self._load()
        session = sessions.pop(session_id, None)
        if session is None:
            raise SessionNotFound(session_id)
        self._save(sessions)
        return session
