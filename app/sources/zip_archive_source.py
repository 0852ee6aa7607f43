"""
app/sources/zip_archive_source.py

ArchiveSource over an in-memory zip container.
"""

from __future__ import annotations

import io
import zipfile
import zlib
from typing import BinaryIO

from app.sources.base import ArchiveEntry, ArchiveSource, EntryReadError, InvalidArchiveError

_ENTRY_READ_ERRORS = (
    zipfile.BadZipFile,
    zlib.error,
    NotImplementedError,
    RuntimeError,
    OSError,
)


class ZipArchiveSource(ArchiveSource):
    """
    Zip-backed archive. Entries are decompressed fully on open.
    """

    def __init__(self, content: bytes) -> None:
        try:
            self._zip = zipfile.ZipFile(io.BytesIO(content))
        except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError, ValueError) as exc:
            raise InvalidArchiveError("Upload is not a readable zip archive.") from exc
        self._members = [info for info in self._zip.infolist() if not info.is_dir()]

    def entries(self) -> list[ArchiveEntry]:
        return [
            ArchiveEntry(index=index, name=info.filename)
            for index, info in enumerate(self._members)
        ]

    def open_entry(self, entry: ArchiveEntry) -> BinaryIO:
        if not 0 <= entry.index < len(self._members):
            raise EntryReadError(f"Archive has no entry #{entry.index} ({entry.name!r}).")
        try:
            return io.BytesIO(self._zip.read(self._members[entry.index]))
        except _ENTRY_READ_ERRORS as exc:
            raise EntryReadError(f"Cannot read archive entry {entry.name!r}: {exc}") from exc

    def close(self) -> None:
        self._zip.close()

    def __enter__(self) -> ZipArchiveSource:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
