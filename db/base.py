"""
db/base.py

Declarative base for all SQLAlchemy models.
"""

from decimal import Decimal
from typing import Any

from sqlalchemy import Numeric
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Project-wide declarative base.
    All models must inherit from this class.
    """

    type_annotation_map: dict[type, Any] = {
        Decimal: Numeric(10, 2),
    }
