"""
db/models/price_record.py

Persisted price record keyed by the client-supplied external identifier.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import Date, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base


class PriceRecord(Base):
    __tablename__ = "prices"

    external_id: Mapped[str] = mapped_column(
        "id",
        String(255),
        primary_key=True,
        comment="Client-supplied natural key; duplicates are ignored on insert",
    )
    created_at: Mapped[date] = mapped_column(Date, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[Decimal] = mapped_column(nullable=False)

    __table_args__ = (
        Index("ix_prices_category", "category"),
    )
