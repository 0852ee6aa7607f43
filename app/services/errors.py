"""
Service-layer exceptions for price ingestion and export.
"""

from __future__ import annotations


class PriceStoreError(RuntimeError):
    """
    Raised when the store rejects a unit of work; nothing was committed.
    """


class PriceExportError(RuntimeError):
    """
    Raised when the export CSV text or archive cannot be built.
    """
