"""
app/validators package marker.
"""

from app.validators.price_row_validator import REQUIRED_COLUMNS, PriceRowValidator

__all__ = [
    "PriceRowValidator",
    "REQUIRED_COLUMNS",
]
