from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from pulse.core.models.session import Session


class ExporterBase(ABC):
    filename_stem = "workshop-export"
    dated_filename = False

    @property
    @abstractmethod
    def content_type(self) -> str: ...

    @property
    @abstractmethod
    def file_extension(self) -> str: ...

    @abstractmethod
    def generate(self, session: Session) -> bytes: ...

    def filename_for(self, session: Session, today: date) -> str:
        """Default export filename, keyed by ``today`` or by the session id."""
        key = today.isoformat() if self.dated_filename else session.id
        return f"{self.filename_stem}-{key}.{self.file_extension}"
