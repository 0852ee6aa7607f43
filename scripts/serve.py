"""
Run the price archive API from CLI.

    python -m scripts.serve [--host HOST] [--port PORT]
"""

from __future__ import annotations

import argparse

import uvicorn

from app.config import get_server_settings


def main() -> int:
    settings = get_server_settings()
    parser = argparse.ArgumentParser(description="Serve the price archive API.")
    parser.add_argument("--host", default=settings.host, help="Bind address (APP_HOST).")
    parser.add_argument("--port", type=int, default=settings.port, help="Listen port (APP_PORT).")
    args = parser.parse_args()

    uvicorn.run(
        "app.main:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
