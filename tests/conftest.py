"""
Shared fixtures: an in-memory SQLite store with the ORM schema, a zip
builder, and a TestClient bound to the store.
"""

from __future__ import annotations

import io
import zipfile
from collections.abc import Callable, Iterator, Mapping

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import db.models  # noqa: F401  registers the prices table on Base.metadata
from app.main import create_app
from db.base import Base
from db.models.price_record import PriceRecord
from db.session import create_session_factory

ZipBuilder = Callable[[Mapping[str, "str | bytes"]], bytes]


def _new_sqlite_engine() -> Engine:
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture()
def engine() -> Iterator[Engine]:
    """Fresh in-memory database with the prices table created."""
    test_engine = _new_sqlite_engine()
    Base.metadata.create_all(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture()
def schemaless_engine() -> Iterator[Engine]:
    """In-memory database without any tables; every query fails."""
    test_engine = _new_sqlite_engine()
    yield test_engine
    test_engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return create_session_factory(engine)


@pytest.fixture()
def count_rows(session_factory: sessionmaker[Session]) -> Callable[[], int]:
    def _count() -> int:
        with session_factory() as session:
            return int(session.scalar(select(func.count()).select_from(PriceRecord)))

    return _count


@pytest.fixture()
def build_zip() -> ZipBuilder:
    """Return a helper that zips ``{entry_name: content}`` in insertion order."""

    def _build(entries: Mapping[str, str | bytes]) -> bytes:
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, mode="w", compression=zipfile.ZIP_DEFLATED) as archive:
            for name, content in entries.items():
                data = content.encode("utf-8") if isinstance(content, str) else content
                archive.writestr(name, data)
        return buf.getvalue()

    return _build


@pytest.fixture()
def client(engine: Engine) -> TestClient:
    # Not entered as a context manager: the lifespan would dispose the
    # in-memory engine on exit.
    return TestClient(create_app(engine=engine))
