from __future__ import annotations

import structlog
from msgspec import DecodeError

from pulse.core.errors import CorruptRegion
from pulse.core.models.session import ResponseRecord, decode_responses, encode_responses
from pulse.core.protocols import Region, StoragePort

log: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


class ResponseStore:
    """Flat, durable collection of every response across all sessions."""

    def __init__(self, storage: StoragePort) -> None:
        self._storage = storage

    def _load(self) -> list[ResponseRecord]:
        data = self._storage.get(Region.RESPONSES)
        if not data:
            return []
        try:
            return decode_responses(data)
        except (DecodeError, ValueError, TypeError) as exc:
            log.error("responses_unreadable", region=Region.RESPONSES.value, error=str(exc))
            raise CorruptRegion(Region.RESPONSES.value, str(exc)) from exc

    def _save(self, responses: list[ResponseRecord]) -> None:
        self._storage.set(Region.RESPONSES, encode_responses(responses))

    def append(self, record: ResponseRecord) -> None:
        responses = self._load()
        responses.append(record)
        self._save(responses)

    def list_all(self) -> list[ResponseRecord]:
        return self._load()

    def list_by_session(self, session_id: str) -> list[ResponseRecord]:
        return [record for record in self._load() if record.session_id == session_id]

    def delete_by_session(self, session_id: str) -> int:
        responses = self._load()
        kept = [record for record in responses if record.session_id != session_id]
        removed = len(responses) - len(kept)
        if removed:
            self._save(kept)
        return removed
