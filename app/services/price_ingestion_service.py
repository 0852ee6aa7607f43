"""
app/services/price_ingestion_service.py

Service layer for archive ingestion.

One request is one unit of work:

    1. open the archive and parse every `.csv` entry (row and entry problems
       are absorbed and reported as diagnostics)
    2. upsert every accepted record in parse order, keyed on external id
       (insert if absent, never update)
    3. aggregate distinct categories and price sum over the whole table
    4. commit

Any store failure in steps 2-4 rolls back the whole batch.

``total_items`` counts every record whose upsert executed, including no-ops
on an external id that was already stored. It answers "how many records did
this request accept for processing", not "how many rows are new";
``new_items`` carries the latter.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.config import get_price_ingestion_settings
from app.domain.price_record import IngestionSummary, PriceRecordInput, PriceTotals, RowRejection
from app.logging_utils import log_event
from app.repositories.price_repository import PriceRepository
from app.services.archive_extractor import ArchiveExtractor
from app.services.errors import PriceStoreError
from app.services.price_csv_parser import PriceCSVParser
from app.sources.zip_archive_source import ZipArchiveSource

logger = logging.getLogger(__name__)


class PriceIngestionService:
    """
    Coordinates archive extraction and the atomic persistence of its records.
    """

    def __init__(
        self,
        *,
        session_factory: sessionmaker[Session],
        extractor: ArchiveExtractor | None = None,
        repository_factory: Callable[[Session], PriceRepository] = PriceRepository,
    ) -> None:
        self._session_factory = session_factory
        self._extractor = extractor or ArchiveExtractor()
        self._repository_factory = repository_factory

    def ingest_archive(self, content: bytes) -> IngestionSummary:
        """
        Parse an uploaded zip archive and persist its valid records.

        Raises:
            InvalidArchiveError: the bytes are not a readable archive.
            PriceStoreError:     the unit of work was rolled back.
        """

        with ZipArchiveSource(content) as archive:
            extraction = self._extractor.extract(archive)

        logger.info(
            "Archive extracted entries_processed=%d entries_skipped=%d entries_failed=%d "
            "records=%d rows_rejected=%d",
            extraction.entries_processed,
            extraction.entries_skipped,
            extraction.entries_failed,
            len(extraction.records),
            extraction.rows_rejected,
        )

        return self.persist_records(
            extraction.records,
            rows_rejected=extraction.rows_rejected,
            rejections=extraction.rejections,
        )

    def persist_records(
        self,
        records: Sequence[PriceRecordInput],
        *,
        rows_rejected: int = 0,
        rejections: Sequence[RowRejection] = (),
    ) -> IngestionSummary:
        """
        Upsert *records* and aggregate the whole table in one transaction.
        """

        processed = 0
        inserted = 0
        try:
            with self._session_factory() as session, session.begin():
                repository = self._repository_factory(session)
                for record in records:
                    if repository.insert_if_absent(record):
                        inserted += 1
                    processed += 1
                totals: PriceTotals = repository.aggregate_totals()
        except SQLAlchemyError as exc:
            logger.exception(
                "Price ingestion rolled back after %d of %d upserts",
                processed,
                len(records),
            )
            raise PriceStoreError("Failed to persist price records.") from exc

        log_event(
            logger,
            logging.INFO,
            "price_ingestion_committed",
            total_items=processed,
            new_items=inserted,
            total_categories=totals.total_categories,
            total_price=totals.total_price,
        )

        return IngestionSummary(
            total_items=processed,
            new_items=inserted,
            total_categories=totals.total_categories,
            total_price=totals.total_price,
            rows_rejected=rows_rejected,
            rejections=list(rejections),
        )


def build_price_ingestion_service(session_factory: sessionmaker[Session]) -> PriceIngestionService:
    """
    Build the ingestion service with env-driven diagnostics settings.
    """

    settings = get_price_ingestion_settings()
    parser = PriceCSVParser(
        max_captured_rejections=settings.max_captured_rejections,
        log_rejected_rows=settings.log_rejected_rows,
    )
    return PriceIngestionService(
        session_factory=session_factory,
        extractor=ArchiveExtractor(
            parser=parser,
            max_captured_rejections=settings.max_captured_rejections,
        ),
    )
