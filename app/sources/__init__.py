"""
app/sources package marker.
"""

from app.sources.base import (
    ArchiveEntry,
    ArchiveSource,
    EntryReadError,
    InvalidArchiveError,
    RowReadError,
    RowSource,
    StreamReadError,
)
from app.sources.csv_row_source import CSVRowSource
from app.sources.zip_archive_source import ZipArchiveSource

__all__ = [
    "ArchiveEntry",
    "ArchiveSource",
    "CSVRowSource",
    "EntryReadError",
    "InvalidArchiveError",
    "RowReadError",
    "RowSource",
    "StreamReadError",
    "ZipArchiveSource",
]
