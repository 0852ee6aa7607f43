"""
tests/test_archive_extractor.py

ArchiveExtractor and ZipArchiveSource: suffix filtering, entry isolation,
listing order.
"""

from __future__ import annotations

import io
import zipfile
from typing import BinaryIO

import pytest

from app.services.archive_extractor import ArchiveExtractor, is_csv_entry
from app.services.price_csv_parser import PriceCSVParser
from app.sources.base import ArchiveEntry, ArchiveSource, EntryReadError, InvalidArchiveError
from app.sources.zip_archive_source import ZipArchiveSource

HEADER = "id,name,category,price,create_date\n"


class _FlakyArchive(ArchiveSource):
    """In-memory archive whose listed-but-missing entries fail to open."""

    def __init__(self, entries: dict[str, str], broken: set[str]) -> None:
        self._entries = entries
        self._broken = broken

    def entries(self) -> list[ArchiveEntry]:
        names = [*self._entries, *sorted(self._broken)]
        return [ArchiveEntry(index=index, name=name) for index, name in enumerate(names)]

    def open_entry(self, entry: ArchiveEntry) -> BinaryIO:
        if entry.name in self._broken:
            raise EntryReadError(f"Cannot read archive entry {entry.name!r}")
        return io.BytesIO(self._entries[entry.name].encode("utf-8"))


@pytest.mark.parametrize(
    "name, expected",
    [
        ("data.csv", True),
        ("DATA.CSV", True),
        ("nested/dir/prices.Csv", True),
        ("notes.txt", False),
        ("data.CSV.bak", False),
        ("csv", False),
    ],
)
def test_is_csv_entry(name: str, expected: bool) -> None:
    assert is_csv_entry(name) is expected


def test_only_csv_entries_contribute(build_zip) -> None:
    content = build_zip(
        {
            "notes.txt": HEADER + "9,Ignored,Docs,1.00,2024-01-01\n",
            "data.CSV.bak": HEADER + "8,Ignored,Backup,1.00,2024-01-01\n",
            "DATA.CSV": HEADER + "1,Widget,Tools,9.99,2024-01-01\n",
        }
    )

    with ZipArchiveSource(content) as archive:
        result = ArchiveExtractor().extract(archive)

    assert [r.external_id for r in result.records] == ["1"]
    assert result.entries_processed == 1
    assert result.entries_skipped == 2
    assert result.entries_failed == 0


def test_records_follow_archive_listing_order(build_zip) -> None:
    content = build_zip(
        {
            "b.csv": HEADER + "b1,B,Cat,1.00,2024-01-01\nb2,B,Cat,2.00,2024-01-01\n",
            "a.csv": HEADER + "a1,A,Cat,3.00,2024-01-01\n",
        }
    )

    with ZipArchiveSource(content) as archive:
        result = ArchiveExtractor().extract(archive)

    assert [r.external_id for r in result.records] == ["b1", "b2", "a1"]


def test_unreadable_entry_does_not_abort_siblings() -> None:
    archive = _FlakyArchive(
        entries={"good.csv": HEADER + "1,Widget,Tools,9.99,2024-01-01\n"},
        broken={"broken.csv"},
    )

    result = ArchiveExtractor().extract(archive)

    assert [r.external_id for r in result.records] == ["1"]
    assert result.entries_failed == 1
    assert result.entries_processed == 1


def test_entries_sharing_a_name_are_read_separately() -> None:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, mode="w") as archive:
        with pytest.warns(UserWarning, match="Duplicate name"):
            archive.writestr("a.csv", HEADER + "1,First,Tools,1.00,2024-01-01\n")
            archive.writestr("a.csv", HEADER + "2,Second,Tools,2.00,2024-01-02\n")

    with ZipArchiveSource(buf.getvalue()) as source:
        result = ArchiveExtractor().extract(source)

    assert [r.external_id for r in result.records] == ["1", "2"]
    assert [r.name for r in result.records] == ["First", "Second"]
    assert result.entries_processed == 2


def test_entry_without_header_is_dropped(build_zip) -> None:
    content = build_zip(
        {
            "empty.csv": "",
            "full.csv": HEADER + "1,Widget,Tools,9.99,2024-01-01\n",
        }
    )

    with ZipArchiveSource(content) as archive:
        result = ArchiveExtractor().extract(archive)

    assert [r.external_id for r in result.records] == ["1"]
    assert result.entries_failed == 1


def test_invalid_utf8_entry_is_dropped(build_zip) -> None:
    content = build_zip(
        {
            "latin1.csv": "id,name\n1,Caf\xe9,Food,2.00,2024-01-01\n".encode("latin-1"),
            "ok.csv": HEADER + "2,Tea,Food,1.00,2024-01-01\n",
        }
    )

    with ZipArchiveSource(content) as archive:
        result = ArchiveExtractor().extract(archive)

    assert [r.external_id for r in result.records] == ["2"]
    assert result.entries_failed == 1


def test_rejections_are_collected_across_entries(build_zip) -> None:
    content = build_zip(
        {
            "a.csv": HEADER + "1,Widget,Tools,bad,2024-01-01\n",
            "b.csv": HEADER + "2,Gadget,Toys,1.00,not-a-date\n",
        }
    )

    with ZipArchiveSource(content) as archive:
        result = ArchiveExtractor().extract(archive)

    assert result.records == []
    assert result.rows_rejected == 2
    assert [(d.entry_name, d.column) for d in result.rejections] == [
        ("a.csv", "price"),
        ("b.csv", "created_at"),
    ]


def test_zip_source_rejects_non_archive_bytes() -> None:
    with pytest.raises(InvalidArchiveError):
        ZipArchiveSource(b"definitely not a zip file")


def test_zip_source_lists_files_but_not_directories() -> None:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, mode="w") as archive:
        archive.writestr(zipfile.ZipInfo("folder/"), b"")
        archive.writestr("folder/prices.csv", HEADER)

    with ZipArchiveSource(buf.getvalue()) as source:
        assert source.entries() == [ArchiveEntry(index=0, name="folder/prices.csv")]


def test_zip_source_reports_missing_entry(build_zip) -> None:
    with ZipArchiveSource(build_zip({"a.csv": HEADER})) as source:
        with pytest.raises(EntryReadError):
            source.open_entry(ArchiveEntry(index=5, name="missing.csv"))


def test_captured_rejections_are_capped_across_entries(build_zip) -> None:
    bad_rows = HEADER + "1,a\n2,b\n"
    content = build_zip({"a.csv": bad_rows, "b.csv": bad_rows, "c.csv": bad_rows})
    extractor = ArchiveExtractor(
        parser=PriceCSVParser(max_captured_rejections=2, log_rejected_rows=False),
        max_captured_rejections=3,
    )

    with ZipArchiveSource(content) as archive:
        result = extractor.extract(archive)

    assert result.rows_rejected == 6
    assert [(d.entry_name, d.row_number) for d in result.rejections] == [
        ("a.csv", 2),
        ("a.csv", 3),
        ("b.csv", 2),
    ]
