from __future__ import annotations

from enum import StrEnum
from typing import Protocol, runtime_checkable

from pulse.core.models.session import Session


class Region(StrEnum):
    """Named regions of the key-value storage collaborator."""

    RESPONSES = "workshopResponses"
    SESSIONS = "workshopSessions"
    CURRENT_SESSION = "currentSessionId"


@runtime_checkable
class StoragePort(Protocol):
    """Protocol for the key-value store holding the persisted regions."""

    def get(self, region: Region) -> bytes | None: ...

    def set(self, region: Region, data: bytes) -> None: ...


@runtime_checkable
class Exporter(Protocol):
    """Protocol for rendering a session to a portable format."""

    def generate(self, session: Session) -> bytes: ...

    @property
    def content_type(self) -> str: ...

    @property
    def file_extension(self) -> str: ...
