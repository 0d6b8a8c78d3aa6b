"""Environment-driven settings.

Values come from the process environment, optionally seeded from a `.env`
file in the working directory via python-dotenv. Defaults serve the API on
0.0.0.0:8081 with CORS open to every origin.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv


DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8081
DEFAULT_API_URL = f"http://localhost:{DEFAULT_PORT}"

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH"]
CORS_HEADERS = ["Content-Type"]


@dataclass
class Settings:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    api_url: str = DEFAULT_API_URL


def _split_origins(raw: Optional[str]) -> List[str]:
    if not raw:
        return ["*"]
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or ["*"]


def _parse_port(raw: Optional[str]) -> int:
    if raw is None or raw.strip() == "":
        return DEFAULT_PORT
    try:
        port = int(raw)
    except ValueError:
        raise ValueError(f"MATCHTRACKER_PORT must be an integer, got {raw!r}") from None
    if not 0 < port < 65536:
        raise ValueError(f"MATCHTRACKER_PORT out of range: {port}")
    return port


def load_settings(dotenv: bool = True) -> Settings:
    """Build Settings from the environment.

    Raises ValueError when MATCHTRACKER_PORT is set but not a valid port.
    """
    if dotenv:
        load_dotenv(find_dotenv(usecwd=True))
    return Settings(
        host=os.getenv("MATCHTRACKER_HOST", DEFAULT_HOST),
        port=_parse_port(os.getenv("MATCHTRACKER_PORT")),
        log_level=os.getenv("MATCHTRACKER_LOG_LEVEL", "INFO").upper(),
        cors_origins=_split_origins(os.getenv("MATCHTRACKER_CORS_ORIGINS")),
        api_url=os.getenv("MATCHTRACKER_API_URL", DEFAULT_API_URL),
    )
