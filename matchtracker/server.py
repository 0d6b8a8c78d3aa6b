"""Serve the match API with uvicorn.

Usage:
    python -m matchtracker.server --port 8081

Flags override the MATCHTRACKER_* environment variables (see `config`).
"""
from __future__ import annotations

import argparse
import logging
from typing import Optional

import uvicorn

from matchtracker.app import create_app
from matchtracker.config import load_settings
from matchtracker.logging_config import setup_logging
from matchtracker.repository import MatchRepository

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Run the in-memory match tracking API")
    p.add_argument("--host", help="Interface to bind (default: MATCHTRACKER_HOST or 0.0.0.0)")
    p.add_argument("--port", type=int, help="Port to listen on (default: MATCHTRACKER_PORT or 8081)")
    p.add_argument("--log-level", help="Logging level (default: MATCHTRACKER_LOG_LEVEL or INFO)")
    p.add_argument("--reload", action="store_true", help="Restart on code changes (development only)")
    return p


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings()
    if args.host:
        settings.host = args.host
    if args.port is not None:
        settings.port = args.port
    if args.log_level:
        settings.log_level = args.log_level.upper()

    setup_logging(settings.log_level)
    logger.info("match tracker listening on %s:%d", settings.host, settings.port)

    if args.reload:
        # reload needs an import string; the factory builds a fresh repository
        uvicorn.run(
            "matchtracker.app:create_app",
            factory=True,
            host=settings.host,
            port=settings.port,
            reload=True,
            log_config=None,
        )
    else:
        app = create_app(MatchRepository(), settings)
        uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())  # pragma: no cover
