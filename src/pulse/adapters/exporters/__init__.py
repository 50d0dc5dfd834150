"""Session exporters."""

from pulse.adapters.exporters.csv import CsvExporter
from pulse.adapters.exporters.html import HtmlExporter
from pulse.adapters.exporters.json import JsonExporter

__all__ = ["CsvExporter", "HtmlExporter", "JsonExporter"]
