"""
app/repositories/price_repository.py

Persistence layer for price records.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Callable

from sqlalchemy import distinct, func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from app.domain.price_record import PriceRecordInput, PriceTotals, quantize_currency
from db.models.price_record import PriceRecord

_NATURAL_KEY_COLUMN = "id"

_INSERT_BY_DIALECT: dict[str, Callable[..., Any]] = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class PriceRepository:
    """
    Repository for idempotent writes and whole-table reads of price records.

    The caller owns the session and its transaction boundaries.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def insert_if_absent(self, record: PriceRecordInput) -> bool:
        """
        Insert one record unless its external id is already stored.

        Returns True when a row was created. A conflicting row is left
        untouched; any other failure propagates as SQLAlchemyError.
        """

        insert = self._dialect_insert()
        stmt = (
            insert(PriceRecord.__table__)
            .values(
                id=record.external_id,
                created_at=record.created_at,
                name=record.name,
                category=record.category,
                price=record.price,
            )
            .on_conflict_do_nothing(index_elements=[_NATURAL_KEY_COLUMN])
        )
        result = self._session.execute(stmt)
        return result.rowcount == 1

    def aggregate_totals(self) -> PriceTotals:
        """
        Distinct category count and price sum over every stored row.
        """

        stmt = select(
            func.count(distinct(PriceRecord.category)),
            func.coalesce(func.sum(PriceRecord.price), 0),
        )
        category_count, raw_total = self._session.execute(stmt).one()
        total = raw_total if isinstance(raw_total, Decimal) else Decimal(str(raw_total))
        return PriceTotals(
            total_categories=int(category_count),
            total_price=quantize_currency(total),
        )

    def list_all(self) -> list[PriceRecord]:
        stmt = select(PriceRecord).order_by(PriceRecord.external_id)
        return list(self._session.scalars(stmt))

    def _dialect_insert(self) -> Callable[..., Any]:
        dialect_name = self._session.get_bind().dialect.name
        try:
            return _INSERT_BY_DIALECT[dialect_name]
        except KeyError as exc:
            raise RuntimeError(
                f"Idempotent insert is not supported for dialect {dialect_name!r}."
            ) from exc
