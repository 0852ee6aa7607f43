"""
app/services package marker.
"""

from app.services.archive_extractor import ArchiveExtractor
from app.services.errors import PriceExportError, PriceStoreError
from app.services.price_csv_parser import PriceCSVParser
from app.services.price_export_service import PriceExportService
from app.services.price_ingestion_service import (
    PriceIngestionService,
    build_price_ingestion_service,
)

__all__ = [
    "ArchiveExtractor",
    "PriceCSVParser",
    "PriceExportError",
    "PriceExportService",
    "PriceIngestionService",
    "PriceStoreError",
    "build_price_ingestion_service",
]
