"""
app/services/price_export_service.py

Exports every stored price record as `data.csv` inside a zip archive.

Rows are ordered by external id. Prices always carry two fractional digits
and dates are written as YYYY-MM-DD. An empty store still produces an archive
whose CSV holds the header row only.
"""

from __future__ import annotations

import csv
import io
import logging
import zipfile
from collections.abc import Iterable
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.domain.price_record import quantize_currency
from app.repositories.price_repository import PriceRepository
from app.services.errors import PriceExportError, PriceStoreError
from db.models.price_record import PriceRecord

logger = logging.getLogger(__name__)

EXPORT_HEADER: tuple[str, ...] = ("id", "name", "category", "price", "create_date")
EXPORT_ENTRY_NAME = "data.csv"
EXPORT_ARCHIVE_NAME = "data.zip"


def render_prices_csv(records: Iterable[PriceRecord]) -> str:
    """Serialize records to comma-delimited text with a fixed header row."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(EXPORT_HEADER)
    for record in records:
        writer.writerow(
            [
                record.external_id,
                record.name,
                record.category,
                str(quantize_currency(Decimal(record.price))),
                record.created_at.isoformat(),
            ]
        )
    return buf.getvalue()


def build_archive(csv_text: str) -> bytes:
    """Package *csv_text* as the single entry of a new zip archive."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, mode="w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr(EXPORT_ENTRY_NAME, csv_text.encode("utf-8"))
    return buf.getvalue()


class PriceExportService:
    """
    Read-only export of the full price table.
    """

    def __init__(self, *, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def export_archive(self) -> bytes:
        """
        Build the export archive.

        Raises:
            PriceStoreError:  the store query failed.
            PriceExportError: the CSV text or archive could not be built.
        """

        try:
            with self._session_factory() as session:
                records = PriceRepository(session).list_all()
        except SQLAlchemyError as exc:
            raise PriceStoreError("Failed to load price records.") from exc

        try:
            content = build_archive(render_prices_csv(records))
        except (csv.Error, OSError, ValueError, zipfile.LargeZipFile) as exc:
            raise PriceExportError("Failed to build the export archive.") from exc

        logger.info("Price export built records=%d bytes=%d", len(records), len(content))
        return content
