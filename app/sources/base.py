"""
app/sources/base.py

Narrow reading interfaces the ingestion pipeline depends on.

The pipeline only needs to list and open archive entries and to pull rows one
at a time; the concrete zip/CSV implementations live next to this module and
can be swapped without touching the parser or extractor.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import BinaryIO


class InvalidArchiveError(ValueError):
    """
    Raised when the uploaded bytes cannot be opened as an archive at all.
    """


class EntryReadError(RuntimeError):
    """
    Raised when one archive entry (or its header row) cannot be read.
    """


class RowReadError(ValueError):
    """
    Raised for one malformed row; the stream stays readable.
    """

    def __init__(self, message: str, *, line_number: int | None = None) -> None:
        super().__init__(message)
        self.line_number = line_number


class StreamReadError(RuntimeError):
    """
    Raised when the underlying stream cannot be read any further.
    """


class RowSource(ABC):
    """
    Produces raw rows from one tabular stream.
    """

    @abstractmethod
    def read_row(self) -> list[str] | None:
        """
        Return the next row, or None at end of input.

        Raises RowReadError for a malformed row and StreamReadError when
        nothing more can be read.
        """


@dataclass(frozen=True)
class ArchiveEntry:
    """
    One archive member. ``index`` is its position in the listing, so members
    sharing a name stay distinct.
    """

    index: int
    name: str


class ArchiveSource(ABC):
    """
    Lists and opens named entries of one archive.
    """

    @abstractmethod
    def entries(self) -> list[ArchiveEntry]:
        """
        Return file entries in archive-listing order.
        """

    @abstractmethod
    def open_entry(self, entry: ArchiveEntry) -> BinaryIO:
        """
        Open one entry as a binary stream. Raises EntryReadError on failure.
        """
