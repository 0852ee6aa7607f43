"""
app/services/archive_extractor.py

Turns an uploaded archive into one ordered list of validated price records.

Only entries whose final suffix is `.csv` (any case) are parsed. An entry that
cannot be opened, or whose header cannot be read, is logged and contributes
nothing; its siblings are still processed. Captured rejections are capped
across the whole archive; `rows_rejected` always counts every dropped row.
"""

from __future__ import annotations

import logging

from app.domain.price_record import ExtractionResult, PriceRecordInput, RowRejection
from app.logging_utils import log_event
from app.services.price_csv_parser import PriceCSVParser
from app.sources.base import ArchiveSource, EntryReadError
from app.sources.csv_row_source import CSVRowSource

logger = logging.getLogger(__name__)

CSV_SUFFIX = ".csv"


def is_csv_entry(name: str) -> bool:
    return name.lower().endswith(CSV_SUFFIX)


class ArchiveExtractor:
    """
    Drives the CSV parser over every matching archive entry.
    """

    def __init__(
        self,
        *,
        parser: PriceCSVParser | None = None,
        max_captured_rejections: int = 500,
    ) -> None:
        self._parser = parser or PriceCSVParser()
        self._max_captured_rejections = max(1, max_captured_rejections)

    def extract(self, archive: ArchiveSource) -> ExtractionResult:
        records: list[PriceRecordInput] = []
        rejections: list[RowRejection] = []
        rows_rejected = 0
        processed = 0
        skipped = 0
        failed = 0

        for entry in archive.entries():
            name = entry.name
            if not is_csv_entry(name):
                skipped += 1
                continue

            try:
                row_source = CSVRowSource(archive.open_entry(entry))
                try:
                    result = self._parser.parse(row_source, entry_name=name)
                finally:
                    row_source.close()
            except EntryReadError as exc:
                failed += 1
                log_event(
                    logger,
                    logging.WARNING,
                    "archive_entry_failed",
                    entry=name,
                    error=str(exc),
                )
                continue

            processed += 1
            records.extend(result.records)
            room = self._max_captured_rejections - len(rejections)
            if room > 0:
                rejections.extend(result.rejections[:room])
            rows_rejected += result.rows_rejected
            logger.info(
                "Parsed archive entry entry=%r rows_examined=%d accepted=%d rejected=%d",
                name,
                result.rows_examined,
                len(result.records),
                result.rows_rejected,
            )

        return ExtractionResult(
            records=records,
            rejections=rejections,
            rows_rejected=rows_rejected,
            entries_processed=processed,
            entries_skipped=skipped,
            entries_failed=failed,
        )
