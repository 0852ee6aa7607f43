"""
app/validators/price_row_validator.py

Row-level validation and type parsing for price CSV entries.

Column order is fixed: external id, name, category, price, created date.
Columns past the fifth are ignored.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Sequence

from app.domain.price_record import PriceRecordInput, RowRejection, quantize_currency

REQUIRED_COLUMNS: tuple[str, ...] = ("external_id", "name", "category", "price", "created_at")
CREATED_AT_FORMAT = "%Y-%m-%d"


class PriceRowValidator:
    """
    Validates and parses one raw price row.
    """

    def validate_row(
        self,
        *,
        row: Sequence[str],
        row_number: int,
        entry_name: str,
    ) -> tuple[PriceRecordInput | None, list[RowRejection]]:
        """
        Validate and parse one raw row.

        Returns the parsed record and no errors, or None and every problem
        found on the row.
        """

        if len(row) < len(REQUIRED_COLUMNS):
            return None, [
                RowRejection(
                    entry_name=entry_name,
                    row_number=row_number,
                    message=(
                        f"Expected at least {len(REQUIRED_COLUMNS)} columns, got {len(row)}."
                    ),
                    value=",".join(row),
                )
            ]

        errors: list[RowRejection] = []
        external_id, name, category, raw_price, raw_created_at = row[:5]

        price = self._parse_price(
            value=raw_price,
            row_number=row_number,
            entry_name=entry_name,
            errors=errors,
        )
        created_at = self._parse_created_at(
            value=raw_created_at,
            row_number=row_number,
            entry_name=entry_name,
            errors=errors,
        )

        if errors or price is None or created_at is None:
            return None, errors

        return (
            PriceRecordInput(
                external_id=external_id,
                name=name,
                category=category,
                price=price,
                created_at=created_at,
            ),
            [],
        )

    def _parse_price(
        self,
        *,
        value: str,
        row_number: int,
        entry_name: str,
        errors: list[RowRejection],
    ) -> Decimal | None:
        try:
            # Decimal also accepts digit-grouping underscores ("1_000")
            if "_" in value:
                raise InvalidOperation(value)
            parsed = Decimal(value.strip())
            if not parsed.is_finite():
                raise InvalidOperation(value)
            return quantize_currency(parsed)
        except (InvalidOperation, ValueError):
            errors.append(
                RowRejection(
                    entry_name=entry_name,
                    row_number=row_number,
                    column="price",
                    message="price must be a finite decimal number.",
                    value=value,
                )
            )
            return None

    def _parse_created_at(
        self,
        *,
        value: str,
        row_number: int,
        entry_name: str,
        errors: list[RowRejection],
    ) -> date | None:
        try:
            parsed = datetime.strptime(value, CREATED_AT_FORMAT).date()
        except ValueError:
            parsed = None

        # strptime also accepts unpadded months and days
        if parsed is None or parsed.isoformat() != value:
            errors.append(
                RowRejection(
                    entry_name=entry_name,
                    row_number=row_number,
                    column="created_at",
                    message="created_at must be a calendar date formatted YYYY-MM-DD.",
                    value=value,
                )
            )
            return None
        return parsed
