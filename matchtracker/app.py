"""FastAPI application exposing the match repository over HTTP/JSON.

Run with: `python -m matchtracker.server` or
`uvicorn --factory matchtracker.app:create_app --port 8081`.

Endpoints are plain (sync) functions, so FastAPI runs them in its threadpool
and concurrent requests meet in the repository, which does its own locking.
"""
from __future__ import annotations

import logging
import re
from typing import Any, Callable, Dict, Iterable, List, Optional

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from matchtracker import __version__
from matchtracker.config import CORS_HEADERS, CORS_METHODS, Settings, load_settings
from matchtracker.models import MatchPayload
from matchtracker.repository import MatchRepository

logger = logging.getLogger(__name__)

INVALID_ID = "Invalid match ID"
NOT_FOUND = "Match not found"

_ID_RE = re.compile(r"[+-]?([0-9]+)")

# ids are signed 64-bit integers
_ID_MIN = -(2 ** 63)
_ID_MAX = 2 ** 63 - 1


def _parse_match_id(raw: str) -> int:
    """Signed 64-bit decimal integer with an optional sign; anything else is a 400."""
    m = _ID_RE.fullmatch(raw)
    digits = m.group(1).lstrip("0") if m else ""
    # more than 19 significant digits cannot fit in 64 bits
    if m is None or len(digits) > 19:
        logger.debug("rejected match id %r", raw[:40])
        raise HTTPException(status_code=400, detail=INVALID_ID)
    value = int(digits or "0")
    if raw.startswith("-"):
        value = -value
    if not _ID_MIN <= value <= _ID_MAX:
        logger.debug("rejected match id %r", raw)
        raise HTTPException(status_code=400, detail=INVALID_ID)
    return value


def _not_found(match_id: int) -> HTTPException:
    logger.info("match %d not found", match_id)
    return HTTPException(status_code=404, detail=NOT_FOUND)


def _describe_errors(errors: Iterable[Dict[str, Any]]) -> str:
    """Flatten pydantic/FastAPI validation errors into one line of text."""
    parts: List[str] = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        msg = err.get("msg", "invalid value")
        ctx_error = (err.get("ctx") or {}).get("error")
        if ctx_error and err.get("type") == "json_invalid":
            msg = f"{msg}: {ctx_error}"
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "malformed request body"


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    detail = _describe_errors(exc.errors())
    logger.debug("rejected body for %s %s: %s", request.method, request.url.path, detail)
    return JSONResponse(status_code=400, content={"detail": detail})


def create_app(
    repository: Optional[MatchRepository] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Build the API around an explicitly provided repository.

    A fresh MatchRepository is created when none is passed; settings default
    to `load_settings()` and only affect CORS here.
    """
    repo = repository if repository is not None else MatchRepository()
    settings = settings or load_settings()

    app = FastAPI(title="Match Tracker API", version=__version__)
    app.state.repository = repo

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    def list_matches() -> List[Dict[str, Any]]:
        return [m.to_dict() for m in repo.list_matches()]

    def get_match(match_id: str) -> Dict[str, Any]:
        mid = _parse_match_id(match_id)
        match = repo.get_match(mid)
        if match is None:
            raise _not_found(mid)
        return match.to_dict()

    def create_match(payload: MatchPayload) -> Dict[str, int]:
        return {"id": repo.create_match(payload.to_match())}

    def update_match(match_id: str, payload: MatchPayload) -> Response:
        mid = _parse_match_id(match_id)
        if not repo.update_match(mid, payload.to_match(), payload.supplied_fields()):
            raise _not_found(mid)
        return Response(status_code=200)

    def delete_match(match_id: str) -> Response:
        mid = _parse_match_id(match_id)
        if not repo.delete_match(mid):
            raise _not_found(mid)
        return Response(status_code=200)

    def _stat_endpoint(mutate: Callable[[int], bool]) -> Callable[[str], Response]:
        def endpoint(match_id: str) -> Response:
            mid = _parse_match_id(match_id)
            if not mutate(mid):
                raise _not_found(mid)
            return Response(status_code=200)

        endpoint.__name__ = mutate.__name__
        return endpoint

    app.get("/api/matches")(list_matches)
    app.get("/api/matches/{match_id}")(get_match)
    app.post("/api/matches", status_code=201)(create_match)
    app.put("/api/matches/{match_id}")(update_match)
    app.delete("/api/matches/{match_id}")(delete_match)
    app.patch("/api/matches/{match_id}/goals")(_stat_endpoint(repo.register_goal))
    app.patch("/api/matches/{match_id}/yellowcards")(_stat_endpoint(repo.register_yellow_card))
    app.patch("/api/matches/{match_id}/redcards")(_stat_endpoint(repo.register_red_card))
    app.patch("/api/matches/{match_id}/extratime")(_stat_endpoint(repo.set_extra_time))

    return app

