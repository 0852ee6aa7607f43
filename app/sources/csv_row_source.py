"""
app/sources/csv_row_source.py

RowSource over a UTF-8 comma-delimited byte stream.
"""

from __future__ import annotations

import csv
import io
from typing import BinaryIO

from app.sources.base import RowReadError, RowSource, StreamReadError


class CSVRowSource(RowSource):
    """
    Reads rows with the stdlib csv module; blank lines are skipped.
    """

    def __init__(self, stream: BinaryIO, *, encoding: str = "utf-8-sig") -> None:
        self._text_stream = io.TextIOWrapper(stream, encoding=encoding, newline="")
        self._reader = csv.reader(self._text_stream)

    def read_row(self) -> list[str] | None:
        while True:
            try:
                row = next(self._reader)
            except StopIteration:
                return None
            except csv.Error as exc:
                raise RowReadError(str(exc), line_number=self._reader.line_num) from exc
            except UnicodeDecodeError as exc:
                raise StreamReadError("Stream is not valid UTF-8.") from exc

            if row:
                return row

    def close(self) -> None:
        self._text_stream.close()
