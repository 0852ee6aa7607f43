"""
app/schemas package marker.
"""

from app.schemas.prices import PriceIngestionSummaryResponse

__all__ = [
    "PriceIngestionSummaryResponse",
]
