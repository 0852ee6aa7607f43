"""
app/services/price_csv_parser.py

Folds one tabular stream into accepted price records and rejected-row
diagnostics.

The first row is always discarded as a header, whatever it contains. Row
problems never stop the fold; only an unreadable header aborts the stream.
"""

from __future__ import annotations

import logging

from app.domain.price_record import PriceParseResult, PriceRecordInput, RowRejection
from app.logging_utils import log_event
from app.sources.base import EntryReadError, RowReadError, RowSource, StreamReadError
from app.validators.price_row_validator import PriceRowValidator

logger = logging.getLogger(__name__)


class PriceCSVParser:
    """
    Parses price rows from a RowSource.
    """

    def __init__(
        self,
        *,
        validator: PriceRowValidator | None = None,
        max_captured_rejections: int = 500,
        log_rejected_rows: bool = True,
    ) -> None:
        self._validator = validator or PriceRowValidator()
        self._max_captured_rejections = max(1, max_captured_rejections)
        self._log_rejected_rows = log_rejected_rows

    def parse(self, source: RowSource, *, entry_name: str) -> PriceParseResult:
        """
        Drain *source* and return every valid record in row order.

        Raises EntryReadError when the header row cannot be read; the caller
        decides what an unreadable entry means for its siblings.
        """

        try:
            header = source.read_row()
        except (RowReadError, StreamReadError) as exc:
            raise EntryReadError(f"Cannot read header row of {entry_name!r}: {exc}") from exc
        if header is None:
            raise EntryReadError(f"Entry {entry_name!r} has no header row.")

        records: list[PriceRecordInput] = []
        rejections: list[RowRejection] = []
        rows_examined = 0
        rows_rejected = 0
        row_number = 1

        while True:
            row_number += 1
            try:
                row = source.read_row()
            except RowReadError as exc:
                rows_examined += 1
                rows_rejected += 1
                self._record_rejection(
                    rejections,
                    RowRejection(
                        entry_name=entry_name,
                        row_number=row_number,
                        message=f"Malformed row: {exc}",
                    ),
                )
                continue
            except StreamReadError as exc:
                self._record_rejection(
                    rejections,
                    RowRejection(
                        entry_name=entry_name,
                        row_number=row_number,
                        message=f"Stopped reading entry: {exc}",
                    ),
                )
                break

            if row is None:
                break

            rows_examined += 1
            record, errors = self._validator.validate_row(
                row=row,
                row_number=row_number,
                entry_name=entry_name,
            )
            if record is None:
                rows_rejected += 1
                for error in errors:
                    self._record_rejection(rejections, error)
                continue

            records.append(record)

        return PriceParseResult(
            records=records,
            rejections=rejections,
            rows_examined=rows_examined,
            rows_rejected=rows_rejected,
        )

    def _record_rejection(
        self,
        rejections: list[RowRejection],
        rejection: RowRejection,
    ) -> None:
        if self._log_rejected_rows:
            log_event(
                logger,
                logging.WARNING,
                "price_row_rejected",
                entry=rejection.entry_name,
                row=rejection.row_number,
                column=rejection.column,
                message=rejection.message,
                value=rejection.value,
            )

        if len(rejections) < self._max_captured_rejections:
            rejections.append(rejection)
