"""Small synchronous client for the match API.

Uses HTTPX. A pre-built `httpx.Client` can be injected (tests pass
FastAPI's TestClient, which is one); otherwise a client is created lazily on
first use so constructing a MatchClient never touches the network.

Non-2xx responses raise `MatchApiError`; transport failures surface as the
usual `httpx.HTTPError` subclasses.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from matchtracker.config import DEFAULT_API_URL
from matchtracker.models import Match, MatchPayload


class MatchApiError(Exception):
    """The API answered with an error status."""

    def __init__(self, status_code: int, detail: str):
        super().__init__(f"{status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


def _payload(fields: Dict[str, Any]) -> Dict[str, Any]:
    # Validate locally and emit only what the caller set, under wire names.
    model = MatchPayload(**fields)
    return model.model_dump(by_alias=True, exclude={"id"}, exclude_unset=True)


class MatchClient:
    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    def _client_instance(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(base_url=self.base_url, timeout=self.timeout)
        return self._client

    def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> httpx.Response:
        resp = self._client_instance().request(method, path, json=json)
        if resp.status_code >= 400:
            try:
                body = resp.json()
            except ValueError:
                body = None
            detail = body.get("detail", resp.text) if isinstance(body, dict) else resp.text
            raise MatchApiError(resp.status_code, str(detail))
        return resp

    def list_matches(self) -> List[Match]:
        resp = self._request("GET", "/api/matches")
        return [Match.from_dict(item) for item in resp.json()]

    def get_match(self, match_id: int) -> Match:
        resp = self._request("GET", f"/api/matches/{match_id}")
        return Match.from_dict(resp.json())

    def create_match(self, **fields: Any) -> int:
        """Create a match from keyword fields (home_team=..., away_team=..., ...)."""
        resp = self._request("POST", "/api/matches", json=_payload(fields))
        return int(resp.json()["id"])

    def update_match(self, match_id: int, **fields: Any) -> None:
        self._request("PUT", f"/api/matches/{match_id}", json=_payload(fields))

    def delete_match(self, match_id: int) -> None:
        self._request("DELETE", f"/api/matches/{match_id}")

    def register_goal(self, match_id: int) -> None:
        self._request("PATCH", f"/api/matches/{match_id}/goals")

    def register_yellow_card(self, match_id: int) -> None:
        self._request("PATCH", f"/api/matches/{match_id}/yellowcards")

    def register_red_card(self, match_id: int) -> None:
        self._request("PATCH", f"/api/matches/{match_id}/redcards")

    def set_extra_time(self, match_id: int) -> None:
        self._request("PATCH", f"/api/matches/{match_id}/extratime")

    def close(self) -> None:
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None

    def __enter__(self) -> "MatchClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
