"""
app/api/dependencies.py

Shared FastAPI dependencies for request validation and service lookup.
"""

from __future__ import annotations

from fastapi import File, HTTPException, Request, UploadFile, status

from app.services.price_export_service import PriceExportService
from app.services.price_ingestion_service import PriceIngestionService


def get_archive_upload(file: UploadFile | str | None = File(default=None)) -> UploadFile:
    """
    Require the multipart `file` field as a file part; its content is checked
    by the service. A plain-text form value counts as a missing file.
    """

    if file is None or isinstance(file, str):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Form field 'file' with a zip archive is required.",
        )
    return file


def get_price_ingestion_service(request: Request) -> PriceIngestionService:
    return request.app.state.price_ingestion_service


def get_price_export_service(request: Request) -> PriceExportService:
    return request.app.state.price_export_service
