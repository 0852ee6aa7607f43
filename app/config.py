"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _normalize_prefix(raw: str) -> str:
    prefix = raw.strip().rstrip("/")
    if prefix and not prefix.startswith("/"):
        prefix = "/" + prefix
    return prefix


@dataclass(frozen=True)
class ServerSettings:
    """
    HTTP listener and routing settings.
    """

    host: str = "0.0.0.0"
    port: int = 8000
    api_prefix: str = ""
    log_level: str = "INFO"


@dataclass(frozen=True)
class PriceIngestionSettings:
    """
    Runtime settings for archive ingestion diagnostics.
    """

    log_rejected_rows: bool = True
    max_captured_rejections: int = 500


@lru_cache(maxsize=1)
def get_server_settings() -> ServerSettings:
    """
    Return cached server settings from environment variables.
    """

    return ServerSettings(
        host=_get_str_env("APP_HOST", "0.0.0.0"),
        port=max(1, _get_int_env("APP_PORT", 8000)),
        api_prefix=_normalize_prefix(_get_str_env("API_PREFIX", "")),
        log_level=_get_str_env("LOG_LEVEL", "INFO").upper(),
    )


@lru_cache(maxsize=1)
def get_price_ingestion_settings() -> PriceIngestionSettings:
    """
    Return cached price ingestion settings from environment variables.
    """

    return PriceIngestionSettings(
        log_rejected_rows=_get_bool_env("PRICE_INGEST_LOG_REJECTED_ROWS", True),
        max_captured_rejections=max(1, _get_int_env("PRICE_INGEST_MAX_CAPTURED_REJECTIONS", 500)),
    )
