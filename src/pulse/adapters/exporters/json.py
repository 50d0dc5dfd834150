from __future__ import annotations

import msgspec

from pulse.adapters.exporters.base import ExporterBase
from pulse.adapters.exporters.table import to_document
from pulse.core.models.session import Session


class JsonExporter(ExporterBase):
    content_type = "application/json"
    file_extension = "json"
    filename_stem = "workshop-session"

    def __init__(self, indent: int = 2) -> None:
        self._encoder = msgspec.json.Encoder()
        self._indent = indent

    def generate(self, session: Session) -> bytes:
        payload = self._encoder.encode(to_document(session))
        return msgspec.json.format(payload, indent=self._indent) + b"\n"
