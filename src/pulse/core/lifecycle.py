from __future__ import annotations

from collections.abc import Generator, Mapping
from contextlib import contextmanager
from datetime import datetime, timedelta

import attrs
import structlog
from msgspec import DecodeError

from pulse.core.aggregator import FieldSummary, summarize_all
from pulse.core.errors import (
    ActiveSessionDeletionForbidden,
    ConfirmationRequired,
    PartialWriteError,
    PulseError,
    SessionNotFound,
)
from pulse.core.identity import (
    Clock,
    IdFactory,
    next_session_instant,
    session_display_name,
    session_id_for,
    utc_now,
    uuid_ids,
)
from pulse.core.models.enums import SurveyField
from pulse.core.models.session import (
    ResponseRecord,
    Session,
    SessionSummary,
    decode_pointer,
    encode_pointer,
)
from pulse.core.protocols import Region, StoragePort
from pulse.core.registry import SessionRegistry
from pulse.core.response_store import ResponseStore
from pulse.core.validator import validate_submission

log: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

_EMPTY_REGIONS: dict[Region, bytes] = {
    Region.RESPONSES: b"[]",
    Region.SESSIONS: b"{}",
    Region.CURRENT_SESSION: b"null",
}


@attrs.frozen(slots=True)
class SessionOverview:
    """Header stats for the dashboard."""

    session: Session
    display_name: str
    total: int
    last_response_at: datetime | None
    elapsed: timedelta


class SessionManager:
    """Owns the active session pointer and keeps both stores consistent.

    Every write that touches more than one region runs inside
    ``_transaction``: the touched regions are snapshotted up front and put
    back if anything fails, so readers never see a response in one store
    but not the other.
    """

    def __init__(
        self,
        storage: StoragePort,
        clock: Clock = utc_now,
        id_factory: IdFactory = uuid_ids,
    ) -> None:
        self._storage = storage
        self._clock = clock
        self._id_factory = id_factory
        self._responses = ResponseStore(storage)
        self._registry = SessionRegistry(storage)

    @property
    def response_store(self) -> ResponseStore:
        return self._responses

    @property
    def registry(self) -> SessionRegistry:
        return self._registry

    def _read_pointer(self) -> str | None:
        data = self._storage.get(Region.CURRENT_SESSION)
        if not data:
            return None
        try:
            return decode_pointer(data)
        except (DecodeError, ValueError, TypeError):
            log.warning("session_pointer_unreadable")
            return None

    def _write_pointer(self, session_id: str) -> None:
        self._storage.set(Region.CURRENT_SESSION, encode_pointer(session_id))

    @contextmanager
    def _transaction(self, operation: str, *regions: Region) -> Generator[None, None, None]:
        snapshot = {region: self._storage.get(region) for region in regions}
        try:
            yield
        except Exception as exc:
            try:
                for region, data in snapshot.items():
                    self._storage.set(region, data if data is not None else _EMPTY_REGIONS[region])
            except Exception as restore_exc:
                log.error(
                    "transaction_rollback_failed",
                    operation=operation,
                    error=str(exc),
                    rollback_error=str(restore_exc),
                )
                raise PartialWriteError(operation, rolled_back=False) from exc
            if isinstance(exc, PulseError):
                raise
            log.error("transaction_rolled_back", operation=operation, error=str(exc))
            raise PartialWriteError(operation, rolled_back=True) from exc

    def _create_session(self) -> Session:
        instant = self._clock()
        session_id = session_id_for(instant)
        while self._registry.exists(session_id):
            instant = next_session_instant(instant)
            session_id = session_id_for(instant)
        session = self._registry.create(session_id, instant)
        log.info("session_created", session_id=session_id)
        return session

    def bootstrap(self) -> str:
        """Make sure an active session exists and return its id."""
        pointer = self._read_pointer()
        if pointer is not None and self._registry.exists(pointer):
            return pointer
        if pointer is not None:
            log.warning("session_pointer_dangling", session_id=pointer)
        with self._transaction("bootstrap", Region.SESSIONS, Region.CURRENT_SESSION):
            session = self._create_session()
            self._write_pointer(session.id)
        return session.id

    def active_session_id(self) -> str:
        return self.bootstrap()

    def active_session(self) -> Session:
        return self._registry.get(self.bootstrap())

    def get_session(self, session_id: str | None = None) -> Session:
        return self._registry.get(session_id if session_id is not None else self.bootstrap())

    def display_name(self, session_id: str) -> str:
        return session_display_name(session_id)

    def start_new_session(self, force: bool = False) -> Session:
        """Archive the active session and make a fresh one active.

        Raises:
            ConfirmationRequired: The active session has no responses and
                ``force`` is False.
        """
        active_id = self.bootstrap()
        active = self._registry.get(active_id)
        if not active.responses and not force:
            raise ConfirmationRequired(
                "The current session has no responses. Start a new session anyway?"
            )
        with self._transaction("start_new_session", Region.SESSIONS, Region.CURRENT_SESSION):
            self._registry.archive(active_id, self._clock())
            session = self._create_session()
            self._write_pointer(session.id)
        log.info(
            "session_archived",
            session_id=active_id,
            responses=len(active.responses),
            next_session_id=session.id,
        )
        return session

    def switch_session(self, target_id: str) -> Session:
        self.bootstrap()
        session = self._registry.get(target_id)
        self._write_pointer(target_id)
        log.info("session_switched", session_id=target_id, archived=session.archived)
        return session

    def delete_session(self, target_id: str) -> int:
        """Delete a non-active session and its responses.

        Returns the number of responses removed.
        """
        active_id = self.bootstrap()
        if target_id == active_id:
            raise ActiveSessionDeletionForbidden(target_id)
        if not self._registry.exists(target_id):
            raise SessionNotFound(target_id)
        with self._transaction("delete_session", Region.SESSIONS, Region.RESPONSES):
            self._registry.delete(target_id, active_id=active_id)
            removed = self._responses.delete_by_session(target_id)
        log.info("session_deleted", session_id=target_id, responses_removed=removed)
        return removed

    def record_response(self, raw: Mapping[str, object]) -> ResponseRecord:
        submission = validate_submission(raw)
        active_id = self.bootstrap()
        if self._registry.get(active_id).archived:
            log.warning("archived_session_write", session_id=active_id)
        record = ResponseRecord(
            id=self._id_factory(),
            session_id=active_id,
            role=submission.role,
            familiarity=submission.familiarity,
            hope=submission.hope,
            timestamp=self._clock(),
        )
        with self._transaction("record_response", Region.RESPONSES, Region.SESSIONS):
            self._responses.append(record)
            self._registry.append_response(active_id, record)
        log.debug("response_recorded", session_id=active_id, response_id=record.id)
        return record

    def responses(self, session_id: str | None = None) -> list[ResponseRecord]:
        """Responses of a session (default: active) in arrival order."""
        target = session_id if session_id is not None else self.bootstrap()
        if not self._registry.exists(target):
            raise SessionNotFound(target)
        return self._responses.list_by_session(target)

    def recent_responses(
        self, session_id: str | None = None, limit: int | None = None
    ) -> list[ResponseRecord]:
        recent = list(reversed(self.responses(session_id)))
        return recent if limit is None else recent[:limit]

    def list_sessions(self) -> list[SessionSummary]:
        active_id = self.bootstrap()
        sessions = sorted(self._registry.list_all(), key=lambda s: s.start_time, reverse=True)
        return [
            SessionSummary(
                id=session.id,
                display_name=session_display_name(session.id),
                start_time=session.start_time,
                archived=session.archived,
                archived_at=session.archived_at,
                last_updated=session.last_updated,
                response_count=len(session.responses),
                active=session.id == active_id,
            )
            for session in sessions
        ]

    def overview(self, session_id: str | None = None) -> SessionOverview:
        session = self.get_session(session_id)
        responses = self._responses.list_by_session(session.id)
        end = session.archived_at if session.archived and session.archived_at else self._clock()
        return SessionOverview(
            session=session,
            display_name=session_display_name(session.id),
            total=len(responses),
            last_response_at=responses[-1].timestamp if responses else None,
            elapsed=end - session.start_time,
        )

    def summaries(self, session_id: str | None = None) -> dict[SurveyField, FieldSummary]:
        return summarize_all(self.responses(session_id))
