"""
tests/test_prices_api.py

HTTP contract for POST /prices and GET /prices.
"""

from __future__ import annotations

import io
import zipfile

from fastapi.testclient import TestClient

from app.main import create_app
from app.services.errors import PriceStoreError

HEADER = "id,name,category,price,create_date\n"


def _upload(client: TestClient, content: bytes, filename: str = "prices.zip"):
    return client.post("/prices", files={"file": (filename, content, "application/zip")})


class _BrokenIngestionService:
    def ingest_archive(self, content: bytes):
        raise PriceStoreError("Failed to persist price records.")


def test_upload_without_file_field_is_rejected(client: TestClient) -> None:
    response = client.post("/prices", data={"other": "value"})

    assert response.status_code == 400
    assert "file" in response.json()["detail"]


def test_upload_with_text_file_field_is_rejected(client: TestClient) -> None:
    response = client.post("/prices", data={"file": "not-a-file"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Form field 'file' with a zip archive is required."


def test_upload_of_non_zip_is_rejected(client: TestClient) -> None:
    response = _upload(client, b"id,name\n1,Widget\n", filename="prices.csv")

    assert response.status_code == 400


def test_upload_returns_summary(client: TestClient, build_zip) -> None:
    content = build_zip(
        {
            "prices.csv": HEADER
            + "1,Widget,Tools,9.99,2024-01-01\n"
            + "2,Gadget,Toys,5.005,2024-01-02\n"
            + "3,Bad,Toys,n/a,2024-01-03\n",
            "notes.txt": "ignored",
        }
    )

    response = _upload(client, content)

    assert response.status_code == 200
    assert response.json() == {"total_items": 2, "total_categories": 2, "total_price": 15.0}


def test_repeated_upload_keeps_store_unchanged(client: TestClient, build_zip, count_rows) -> None:
    content = build_zip({"prices.csv": HEADER + "1,Widget,Tools,9.99,2024-01-01\n"})

    first = _upload(client, content).json()
    second = _upload(client, content).json()

    assert first == second == {"total_items": 1, "total_categories": 1, "total_price": 9.99}
    assert count_rows() == 1


def test_store_failure_on_upload_maps_to_500(client: TestClient, build_zip) -> None:
    client.app.state.price_ingestion_service = _BrokenIngestionService()

    response = _upload(client, build_zip({"prices.csv": HEADER}))

    assert response.status_code == 500
    assert response.json()["detail"] == "Unable to persist price records."


def test_download_returns_zip_attachment(client: TestClient, build_zip) -> None:
    _upload(client, build_zip({"prices.csv": HEADER + "1,Widget,Tools,9.99,2024-01-01\n"}))

    response = client.get("/prices")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/zip"
    assert response.headers["content-disposition"] == 'attachment; filename="data.zip"'
    with zipfile.ZipFile(io.BytesIO(response.content)) as archive:
        assert archive.namelist() == ["data.csv"]
        assert archive.read("data.csv").decode("utf-8") == (
            HEADER + "1,Widget,Tools,9.99,2024-01-01\n"
        )


def test_download_of_empty_store_holds_header_only(client: TestClient) -> None:
    response = client.get("/prices")

    assert response.status_code == 200
    with zipfile.ZipFile(io.BytesIO(response.content)) as archive:
        assert archive.read("data.csv").decode("utf-8") == HEADER


def test_download_store_failure_maps_to_500(schemaless_engine) -> None:
    client = TestClient(create_app(engine=schemaless_engine))

    response = client.get("/prices")

    assert response.status_code == 500
    assert response.json()["detail"] == "Unable to load price records."


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
