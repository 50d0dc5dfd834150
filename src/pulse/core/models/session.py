from __future__ import annotations

from datetime import datetime

import msgspec

from pulse.core.models.enums import Familiarity, Hope, Role


class ResponseRecord(msgspec.Struct, frozen=True, rename="camel"):
    """One participant's validated answers - immutable once recorded."""

    id: str
    session_id: str
    role: Role
    familiarity: Familiarity
    hope: tuple[Hope, ...]
    timestamp: datetime


class Session(msgspec.Struct, rename="camel"):
    """A workshop run and its embedded response list.

    Session is mutable: responses are appended in place and the archive
    markers are set when a newer session takes over. The flat response
    store holds the same records; SessionManager keeps both in step.
    """

    id: str
    start_time: datetime
    responses: list[ResponseRecord] = msgspec.field(default_factory=list)
    archived: bool = False
    archived_at: datetime | None = None
    last_updated: datetime | None = None


class SessionSummary(msgspec.Struct, frozen=True, rename="camel"):
    id: str
    display_name: str
    start_time: datetime
    archived: bool
    archived_at: datetime | None
    last_updated: datetime | None
    response_count: int
    active: bool


_encoder = msgspec.json.Encoder()
_responses_decoder = msgspec.json.Decoder(list[ResponseRecord])
_sessions_decoder = msgspec.json.Decoder(dict[str, Session])
_pointer_decoder = msgspec.json.Decoder(str | None)


def encode_responses(responses: list[ResponseRecord]) -> bytes:
    return _encoder.encode(responses)


def decode_responses(data: bytes) -> list[ResponseRecord]:
    return _responses_decoder.decode(data)


def encode_sessions(sessions: dict[str, Session]) -> bytes:
    return _encoder.encode(sessions)


def decode_sessions(data: bytes) -> dict[str, Session]:
    return _sessions_decoder.decode(data)


def encode_pointer(session_id: str | None) -> bytes:
    return _encoder.encode(session_id)


def decode_pointer(data: bytes) -> str | None:
    return _pointer_decoder.decode(data)
