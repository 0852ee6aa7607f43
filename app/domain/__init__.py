"""
app/domain package marker.
"""

from app.domain.price_record import (
    ExtractionResult,
    IngestionSummary,
    PriceParseResult,
    PriceRecordInput,
    PriceTotals,
    RowRejection,
    quantize_currency,
)

__all__ = [
    "ExtractionResult",
    "IngestionSummary",
    "PriceParseResult",
    "PriceRecordInput",
    "PriceTotals",
    "RowRejection",
    "quantize_currency",
]
