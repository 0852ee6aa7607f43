from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy import inspect as sa_inspect
from sqlalchemy import text
from sqlalchemy.engine import Engine

from app.config import get_server_settings


def _configure_logging(log_level: str) -> None:
    """
    Configure root logging once for the API process.
    """

    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _check_db(engine: Engine) -> None:
    """Run SELECT 1. Raises RuntimeError if the DB is unreachable."""
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except Exception as exc:
        raise RuntimeError("Database unavailable.") from exc


def _check_schema(engine: Engine) -> None:
    """
    Compare Base.metadata table names against the live DB schema.

    Every table registered on Base.metadata must exist in the database.
    Does NOT auto-migrate; the operator runs `alembic upgrade head`.
    """
    import db.models  # noqa: F401  registers all ORM models on Base.metadata
    from db.base import Base

    actual: set[str] = set(sa_inspect(engine).get_table_names())
    expected: set[str] = set(Base.metadata.tables.keys())
    missing = expected - actual

    if missing:
        logging.getLogger(__name__).critical(
            "Schema mismatch: %d table(s) defined in ORM metadata are absent from "
            "the database: %s. Run 'alembic upgrade head' and restart.",
            len(missing),
            ", ".join(sorted(missing)),
        )
        raise RuntimeError(
            f"Schema mismatch: {len(missing)} table(s) missing from the database "
            f"({', '.join(sorted(missing))}). Run migrations and restart."
        )


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Validate DB connectivity and schema on boot; dispose the pool on exit."""
    engine: Engine = application.state.engine
    log = logging.getLogger(__name__)

    _check_db(engine)
    log.info("Database connectivity confirmed")
    _check_schema(engine)
    log.info("Database schema validated")
    try:
        yield
    finally:
        engine.dispose()
        log.info("Database pool disposed")


def create_app(*, engine: Engine | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    The engine is the only store handle: every service receives a session
    factory bound to it. Without an explicit engine one is built from the
    environment (see db.config.resolve_database_url).
    """

    from app.api.routers import prices_router
    from app.services.price_export_service import PriceExportService
    from app.services.price_ingestion_service import build_price_ingestion_service
    from db.session import create_db_engine, create_session_factory

    settings = get_server_settings()
    _configure_logging(settings.log_level)

    bound_engine = engine if engine is not None else create_db_engine()
    session_factory = create_session_factory(bound_engine)

    application = FastAPI(
        title="Price Archive API",
        version="1.0.0",
        lifespan=_lifespan,
    )
    application.state.engine = bound_engine
    application.state.price_ingestion_service = build_price_ingestion_service(session_factory)
    application.state.price_export_service = PriceExportService(session_factory=session_factory)

    application.include_router(prices_router, prefix=settings.api_prefix)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return application


def __getattr__(name: str) -> object:
    # `uvicorn app.main:app` resolves the attribute lazily; importing this
    # module does not require database configuration.
    if name == "app":
        return create_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
