"""
app/schemas/prices.py

Response schemas for price archive endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class PriceIngestionSummaryResponse(BaseModel):
    """
    API response model for one archive ingestion.

    total_items counts records accepted for processing in this request,
    including ones whose external id was already stored.
    """

    total_items: int = Field(..., ge=0)
    total_categories: int = Field(..., ge=0)
    total_price: float
