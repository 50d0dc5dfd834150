from __future__ import annotations

import csv
import io
from collections.abc import Iterable

from pulse.adapters.exporters.base import ExporterBase
from pulse.adapters.exporters.table import TABLE_HEADER, to_table
from pulse.core.models.session import ResponseRecord, Session


def render_csv(responses: Iterable[ResponseRecord]) -> str:
    """Header row unquoted, every data cell double-quoted."""
    buffer = io.StringIO()
    buffer.write(",".join(TABLE_HEADER) + "\n")
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerows(to_table(responses))
    return buffer.getvalue()


class CsvExporter(ExporterBase):
    content_type = "text/csv"
    file_extension = "csv"
    filename_stem = "workshop-responses"
    dated_filename = True

    def generate(self, session: Session) -> bytes:
        return render_csv(session.responses).encode("utf-8")
