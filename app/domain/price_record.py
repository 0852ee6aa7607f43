"""
app/domain/price_record.py

Domain models used by the price archive ingestion and export flows.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def quantize_currency(value: Decimal) -> Decimal:
    """
    Round to two fractional digits, halves away from zero (14.995 -> 15.00).
    """

    return value.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class PriceRecordInput:
    """
    One validated price row prepared for persistence.
    """

    external_id: str
    name: str
    category: str
    price: Decimal
    created_at: date


@dataclass(frozen=True)
class RowRejection:
    """
    Diagnostic for one dropped row (or one unreadable stream).

    ``row_number`` is 1-based and counts the header as row 1.
    """

    entry_name: str
    row_number: int
    message: str
    column: str | None = None
    value: str | None = None


@dataclass(frozen=True)
class PriceParseResult:
    """
    Outcome of folding one tabular stream into accepted and rejected rows.
    """

    records: list[PriceRecordInput] = field(default_factory=list)
    rejections: list[RowRejection] = field(default_factory=list)
    rows_examined: int = 0
    rows_rejected: int = 0


@dataclass(frozen=True)
class ExtractionResult:
    """
    Records gathered from every `.csv` entry of one archive, in listing order.
    """

    records: list[PriceRecordInput] = field(default_factory=list)
    rejections: list[RowRejection] = field(default_factory=list)
    rows_rejected: int = 0
    entries_processed: int = 0
    entries_skipped: int = 0
    entries_failed: int = 0


@dataclass(frozen=True)
class PriceTotals:
    """
    Whole-table aggregates, ``total_price`` already rounded to cents.
    """

    total_categories: int
    total_price: Decimal


@dataclass(frozen=True)
class IngestionSummary:
    """
    End-of-request ingestion summary.

    ``total_items`` counts every record whose upsert executed, including
    no-ops on an already stored external id. ``new_items`` counts only rows
    this request actually inserted.
    """

    total_items: int
    new_items: int
    total_categories: int
    total_price: Decimal
    rows_rejected: int = 0
    rejections: list[RowRejection] = field(default_factory=list)
