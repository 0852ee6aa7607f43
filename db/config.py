"""
Shared environment-driven database configuration helpers.
"""

from __future__ import annotations

import os
from pathlib import Path
from urllib.parse import quote_plus


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    project_root = Path(__file__).resolve().parents[1]
    for filename in (".env", ".env.local"):
        env_path = project_root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


def normalize_postgres_url(url: str) -> str:
    """
    Normalize postgres URLs to SQLAlchemy's recommended psycopg driver form.
    """

    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url


def compose_database_url_from_parts() -> str | None:
    """
    Build a PostgreSQL URL from discrete DB_* variables.

    Returns None unless both DB_HOST and DB_NAME are set.
    """

    host = os.getenv("DB_HOST", "").strip()
    name = os.getenv("DB_NAME", "").strip()
    if not host or not name:
        return None

    user = os.getenv("DB_USER_NAME", "").strip()
    password = os.getenv("DB_PASSWORD", "")
    port = os.getenv("DB_PORT", "").strip() or "5432"
    ssl_mode = os.getenv("DB_SSL_MODE", "").strip() or "disable"

    credentials = ""
    if user:
        credentials = quote_plus(user)
        if password:
            credentials += ":" + quote_plus(password)
        credentials += "@"

    return f"postgresql+psycopg://{credentials}{host}:{port}/{name}?sslmode={ssl_mode}"


def resolve_database_url() -> str:
    """
    Resolve database URL using environment variables and optional .env files.

    Priority:
    1) DATABASE_URL
    2) CLOUD_DATABASE_URL when ENVIRONMENT is cloud-like
    3) LOCAL_DATABASE_URL
    4) DB_USER_NAME / DB_PASSWORD / DB_HOST / DB_PORT / DB_NAME / DB_SSL_MODE
    """

    load_env_files()

    direct_url = os.getenv("DATABASE_URL")
    if direct_url:
        return normalize_postgres_url(direct_url)

    environment = os.getenv("ENVIRONMENT", "local").strip().lower()
    cloud_like_envs = {"prod", "production", "staging", "cloud"}

    cloud_url = os.getenv("CLOUD_DATABASE_URL")
    if environment in cloud_like_envs and cloud_url:
        return normalize_postgres_url(cloud_url)

    local_url = os.getenv("LOCAL_DATABASE_URL")
    if local_url:
        return normalize_postgres_url(local_url)

    composed_url = compose_database_url_from_parts()
    if composed_url:
        return composed_url

    raise RuntimeError(
        "No database URL configured. Set DATABASE_URL, configure "
        "LOCAL_DATABASE_URL / CLOUD_DATABASE_URL, or provide DB_HOST and DB_NAME."
    )
