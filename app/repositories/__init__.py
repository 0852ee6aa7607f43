"""
app/repositories package marker.
"""

from app.repositories.price_repository import PriceRepository

__all__ = [
    "PriceRepository",
]
