"""Reporting module for sanca."""

from .models import ReportContext
from .writers import WRITERS, CsvWriter, JsonWriter, TextWriter, Writer, create_writer

__all__ = [
    "CsvWriter",
    "JsonWriter",
    "ReportContext",
    "TextWriter",
    "WRITERS",
    "Writer",
    "create_writer",
]
