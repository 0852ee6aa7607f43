"""
app/api/routers/prices.py

Price archive HTTP endpoints.

POST /prices   multipart `file` field holding a zip of `.csv` entries
GET  /prices   zip download containing `data.csv`

All parsing, persistence and serialisation live in the services; the router
only maps their exceptions to HTTP status codes.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, UploadFile, status
from fastapi.responses import Response

from app.api.dependencies import (
    get_archive_upload,
    get_price_export_service,
    get_price_ingestion_service,
)
from app.schemas.prices import PriceIngestionSummaryResponse
from app.services.errors import PriceExportError, PriceStoreError
from app.services.price_export_service import EXPORT_ARCHIVE_NAME, PriceExportService
from app.services.price_ingestion_service import PriceIngestionService
from app.sources.base import InvalidArchiveError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["prices"])


@router.post("/prices", response_model=PriceIngestionSummaryResponse)
def upload_prices(
    file: UploadFile = Depends(get_archive_upload),
    ingestion_service: PriceIngestionService = Depends(get_price_ingestion_service),
) -> PriceIngestionSummaryResponse:
    """
    Ingest one zip archive of price CSV files.
    """

    try:
        content = file.file.read()
        summary = ingestion_service.ingest_archive(content)
    except OSError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unable to read the uploaded file.",
        ) from exc
    except InvalidArchiveError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except PriceStoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to persist price records.",
        ) from exc
    finally:
        file.file.close()

    return PriceIngestionSummaryResponse(
        total_items=summary.total_items,
        total_categories=summary.total_categories,
        total_price=float(summary.total_price),
    )


@router.get(
    "/prices",
    response_class=Response,
    responses={200: {"content": {"application/zip": {}}}},
)
def download_prices(
    export_service: PriceExportService = Depends(get_price_export_service),
) -> Response:
    """
    Download every stored price record as a zip archive.
    """

    try:
        content = export_service.export_archive()
    except PriceStoreError as exc:
        logger.exception("Price export query failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to load price records.",
        ) from exc
    except PriceExportError as exc:
        logger.exception("Price export archive construction failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to build the export archive.",
        ) from exc

    return Response(
        content=content,
        media_type="application/zip",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_ARCHIVE_NAME}"'},
    )
