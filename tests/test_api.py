import pytest
from fastapi.testclient import TestClient

from matchtracker.app import create_app
from matchtracker.config import Settings
from matchtracker.repository import MatchRepository


@pytest.fixture
def repo():
    return MatchRepository()


@pytest.fixture
def client(repo):
    return TestClient(create_app(repo, Settings()))


def _create(client, **body):
    payload = {"homeTeam": "A", "awayTeam": "B", "matchDate": "2024-01-01"}
    payload.update(body)
    res = client.post("/api/matches", json=payload)
    assert res.status_code == 201
    return res.json()["id"]


def test_list_empty(client):
    res = client.get("/api/matches")
    assert res.status_code == 200
    assert res.json() == []


def test_create_then_get_omits_zero_stats(client):
    mid = _create(client)
    assert isinstance(mid, int) and mid > 0

    res = client.get(f"/api/matches/{mid}")
    assert res.status_code == 200
    assert res.json() == {"id": mid, "homeTeam": "A", "awayTeam": "B", "matchDate": "2024-01-01"}


def test_create_ignores_id_and_unknown_fields(client, repo):
    res = client.post("/api/matches", json={"id": 42, "homeTeam": "A", "venue": "Somewhere"})
    assert res.status_code == 201
    assert res.json() == {"id": 1}
    assert repo.get_match(42) is None
    assert repo.get_match(1).away_team == ""


def test_create_with_stats_serializes_them(client):
    mid = _create(client, goalCount=2, redCards=1, extraTime=True)
    body = client.get(f"/api/matches/{mid}").json()
    assert body["goalCount"] == 2
    assert body["redCards"] == 1
    assert body["extraTime"] is True
    assert "yellowCards" not in body


def test_list_returns_all_matches(client):
    ids = {_create(client, homeTeam=f"T{i}") for i in range(3)}
    res = client.get("/api/matches")
    assert res.status_code == 200
    assert {m["id"] for m in res.json()} == ids


@pytest.mark.parametrize(
    "body",
    [
        "{not json",
        "[1, 2, 3]",
        '"just a string"',
        '{"homeTeam": 5}',
        '{"goalCount": "many"}',
        '{"goalCount": -1}',
        "",
    ],
)
def test_create_malformed_body_is_400(client, repo, body):
    res = client.post("/api/matches", content=body, headers={"Content-Type": "application/json"})
    assert res.status_code == 400
    assert res.json()["detail"]
    assert len(repo) == 0


def test_invalid_json_reports_decoder_error(client):
    res = client.post("/api/matches", content="{not json", headers={"Content-Type": "application/json"})
    assert res.status_code == 400
    assert "JSON decode error" in res.json()["detail"]


@pytest.mark.parametrize(
    "method,suffix",
    [
        ("GET", ""),
        ("DELETE", ""),
        ("PATCH", "/goals"),
        ("PATCH", "/yellowcards"),
        ("PATCH", "/redcards"),
        ("PATCH", "/extratime"),
    ],
)
def test_invalid_id_is_400(client, method, suffix):
    for bad in ("abc", "1.5", "0x10", "1e3", "1%0A", "9" * 25, "9" * 5000, "-" + "9" * 5000, "9223372036854775808"):
        res = client.request(method, f"/api/matches/{bad}{suffix}")
        assert res.status_code == 400, bad
        assert res.json() == {"detail": "Invalid match ID"}


@pytest.mark.parametrize(
    "method,suffix",
    [
        ("GET", ""),
        ("DELETE", ""),
        ("PATCH", "/goals"),
        ("PATCH", "/yellowcards"),
        ("PATCH", "/redcards"),
        ("PATCH", "/extratime"),
    ],
)
def test_unknown_id_is_404(client, repo, method, suffix):
    for missing in ("999", "0", "-3"):
        res = client.request(method, f"/api/matches/{missing}{suffix}")
        assert res.status_code == 404, missing
        assert res.json() == {"detail": "Match not found"}
    assert len(repo) == 0


def test_signed_id_is_accepted(client):
    mid = _create(client)
    res = client.get(f"/api/matches/+{mid}")
    assert res.status_code == 200
    assert res.json()["id"] == mid


def test_put_replaces_match(client):
    mid = _create(client)
    res = client.put(f"/api/matches/{mid}", json={"id": 77, "homeTeam": "C", "awayTeam": "D", "matchDate": "2024-03-03"})
    assert res.status_code == 200
    assert res.content == b""

    body = client.get(f"/api/matches/{mid}").json()
    assert body == {"id": mid, "homeTeam": "C", "awayTeam": "D", "matchDate": "2024-03-03"}
    assert client.get("/api/matches/77").status_code == 404


def test_put_keeps_omitted_counters_and_extra_time(client):
    mid = _create(client)
    client.patch(f"/api/matches/{mid}/goals")
    client.patch(f"/api/matches/{mid}/goals")
    client.patch(f"/api/matches/{mid}/extratime")

    res = client.put(f"/api/matches/{mid}", json={"homeTeam": "C", "awayTeam": "D", "matchDate": "x", "extraTime": False})
    assert res.status_code == 200

    body = client.get(f"/api/matches/{mid}").json()
    assert body["goalCount"] == 2
    assert body["extraTime"] is True


def test_put_supplied_counter_overwrites(client):
    mid = _create(client)
    client.patch(f"/api/matches/{mid}/yellowcards")
    res = client.put(f"/api/matches/{mid}", json={"homeTeam": "A", "awayTeam": "B", "yellowCards": 0})
    assert res.status_code == 200
    assert "yellowCards" not in client.get(f"/api/matches/{mid}").json()


def test_put_missing_is_404_and_changes_nothing(client, repo):
    mid = _create(client)
    before = client.get("/api/matches").json()

    res = client.put(f"/api/matches/{mid + 1}", json={"homeTeam": "Z"})
    assert res.status_code == 404
    assert client.get("/api/matches").json() == before
    assert len(repo) == 1


def test_put_invalid_id_and_body(client):
    mid = _create(client)
    assert client.put("/api/matches/abc", json={"homeTeam": "Z"}).status_code == 400
    res = client.put(f"/api/matches/{mid}", content="{", headers={"Content-Type": "application/json"})
    assert res.status_code == 400
    assert client.get(f"/api/matches/{mid}").json()["homeTeam"] == "A"


def test_delete_then_get_is_404(client):
    mid = _create(client)
    other = _create(client, homeTeam="other")

    res = client.delete(f"/api/matches/{mid}")
    assert res.status_code == 200
    assert client.get(f"/api/matches/{mid}").status_code == 404
    assert client.delete(f"/api/matches/{mid}").status_code == 404
    assert client.get(f"/api/matches/{other}").json()["homeTeam"] == "other"


def test_ids_not_reused_after_delete(client):
    first = _create(client)
    second = _create(client)
    client.delete(f"/api/matches/{second}")
    third = _create(client)
    assert first < second < third


def test_patch_endpoints_increment(client):
    mid = _create(client)
    for _ in range(3):
        assert client.patch(f"/api/matches/{mid}/goals").status_code == 200
    assert client.patch(f"/api/matches/{mid}/yellowcards").status_code == 200
    assert client.patch(f"/api/matches/{mid}/redcards").status_code == 200
    assert client.patch(f"/api/matches/{mid}/extratime").status_code == 200
    assert client.patch(f"/api/matches/{mid}/extratime").status_code == 200

    body = client.get(f"/api/matches/{mid}").json()
    assert body["goalCount"] == 3
    assert body["yellowCards"] == 1
    assert body["redCards"] == 1
    assert body["extraTime"] is True


def test_cors_preflight_allows_any_origin_with_credentials(client):
    res = client.options(
        "/api/matches/1/goals",
        headers={
            "Origin": "http://example.com",
            "Access-Control-Request-Method": "PATCH",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )
    assert res.status_code == 200
    assert res.headers["access-control-allow-origin"] == "http://example.com"
    assert res.headers["access-control-allow-credentials"] == "true"
    assert "PATCH" in res.headers["access-control-allow-methods"]


def test_cors_preflight_rejects_unlisted_method(client):
    res = client.options(
        "/api/matches",
        headers={"Origin": "http://example.com", "Access-Control-Request-Method": "TRACE"},
    )
    assert res.status_code == 400


def test_cors_headers_on_simple_request(client):
    res = client.get("/api/matches", headers={"Origin": "http://example.com"})
    assert res.status_code == 200
    assert res.headers["access-control-allow-origin"] in ("*", "http://example.com")


def test_apps_do_not_share_state():
    a = TestClient(create_app(MatchRepository(), Settings()))
    b = TestClient(create_app(MatchRepository(), Settings()))
    _create(a)
    assert b.get("/api/matches").json() == []


def test_create_app_without_repository_uses_fresh_one(monkeypatch):
    monkeypatch.delenv("MATCHTRACKER_CORS_ORIGINS", raising=False)
    app = create_app()
    assert isinstance(app.state.repository, MatchRepository)
    assert len(app.state.repository) == 0


def test_int64_bounds_are_well_formed(client):
    for edge in ("9223372036854775807", "-9223372036854775808", "0" * 30 + "5"):
        res = client.get(f"/api/matches/{edge}")
        assert res.status_code == 404, edge


def test_leading_zeros_resolve_to_same_id(client):
    mid = _create(client)
    res = client.get(f"/api/matches/{'0' * 5000}{mid}")
    assert res.status_code == 200
    assert res.json()["id"] == mid


def test_null_body_is_rejected(client, repo):
    res = client.post("/api/matches", content="null", headers={"Content-Type": "application/json"})
    assert res.status_code == 400
    assert len(repo) == 0
