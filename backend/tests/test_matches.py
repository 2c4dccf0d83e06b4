import pytest
from fastapi.testclient import TestClient

from ancient_bowling.main import app
from ancient_bowling.registry import MatchRegistry

BASE = "/api/v0/matches"


@pytest.fixture
def client():
    app.state.registry = MatchRegistry()
    with TestClient(app) as c:
        yield c


def _create(client) -> str:
    resp = client.post(BASE)
    assert resp.status_code == 201
    return resp.json()["id"]


def _ready_match(client, *names: str) -> str:
    mid = _create(client)
    for name in names or ("Ada", "Bo"):
        assert client.post(f"{BASE}/{mid}/players", json={"name": name}).status_code == 200
    assert client.post(f"{BASE}/{mid}/start").status_code == 200
    return mid


def _throw(client, mid: str, *pins: int):
    resp = None
    for p in pins:
        resp = client.post(f"{BASE}/{mid}/throws", json={"pins": p})
        assert resp.status_code == 200, resp.json()
    return resp


def test_healthz(client):
    assert client.get("/healthz").json() == {"status": "ok"}
    assert client.get("/api/healthz").json() == {"status": "ok"}


def test_create_and_get_match(client):
    mid = _create(client)
    resp = client.get(f"{BASE}/{mid}")
    assert resp.status_code == 200
    data = resp.json()
    assert data["id"] == mid
    assert data["started"] is False
    assert data["complete"] is False
    assert data["players"] == []
    assert data["currentPlayer"] is None


def test_list_matches(client):
    first = _create(client)
    second = _ready_match(client, "Ada", "Bo")
    listing = {m["id"]: m for m in client.get(BASE).json()}
    assert set(listing) == {first, second}
    assert listing[second]["started"] is True
    assert listing[second]["players"] == ["Ada", "Bo"]


def test_unknown_match_is_404_problem(client):
    resp = client.get(f"{BASE}/nope")
    assert resp.status_code == 404
    assert resp.headers["content-type"].startswith("application/problem+json")
    body = resp.json()
    assert body["code"] == "match_not_found"
    assert body["status"] == 404
    assert body["instance"] == f"{BASE}/nope"


def test_delete_match(client):
    mid = _create(client)
    assert client.delete(f"{BASE}/{mid}").status_code == 204
    assert client.get(f"{BASE}/{mid}").status_code == 404
    assert client.delete(f"{BASE}/{mid}").status_code == 404


def test_add_player_and_start(client):
    mid = _create(client)
    resp = client.post(f"{BASE}/{mid}/players", json={"name": "Ada"})
    assert [p["name"] for p in resp.json()["players"]] == ["Ada"]

    resp = client.post(f"{BASE}/{mid}/start")
    assert resp.status_code == 400
    assert resp.json()["code"] == "insufficient_players"

    client.post(f"{BASE}/{mid}/players", json={"name": "Bo"})
    resp = client.post(f"{BASE}/{mid}/start")
    assert resp.status_code == 200
    data = resp.json()
    assert data["started"] is True
    assert data["currentPlayer"] == "Ada"
    assert data["currentFrame"] == 1
    assert data["remainingPins"] == 15


def test_duplicate_and_blank_names_rejected(client):
    mid = _create(client)
    client.post(f"{BASE}/{mid}/players", json={"name": "Ada"})
    resp = client.post(f"{BASE}/{mid}/players", json={"name": "Ada"})
    assert resp.status_code == 400
    assert resp.json()["code"] == "invalid_player"

    resp = client.post(f"{BASE}/{mid}/players", json={"name": "   "})
    assert resp.status_code == 400
    assert resp.json()["code"] == "invalid_player"


def test_state_errors_are_409(client):
    mid = _create(client)
    client.post(f"{BASE}/{mid}/players", json={"name": "Ada"})
    client.post(f"{BASE}/{mid}/players", json={"name": "Bo"})

    resp = client.post(f"{BASE}/{mid}/throws", json={"pins": 5})
    assert resp.status_code == 409
    assert resp.json()["code"] == "match_not_started"

    client.post(f"{BASE}/{mid}/start")
    resp = client.post(f"{BASE}/{mid}/start")
    assert resp.status_code == 409
    assert resp.json()["code"] == "match_already_started"

    resp = client.post(f"{BASE}/{mid}/players", json={"name": "Cy"})
    assert resp.status_code == 409


def test_bad_pin_counts(client):
    mid = _ready_match(client)
    resp = client.post(f"{BASE}/{mid}/throws", json={"pins": 16})
    assert resp.status_code == 400
    assert resp.json()["code"] == "invalid_pin_count"

    _throw(client, mid, 10)
    resp = client.post(f"{BASE}/{mid}/throws", json={"pins": 6})
    assert resp.status_code == 400
    assert resp.json()["code"] == "exceeds_remaining_pins"

    resp = client.post(f"{BASE}/{mid}/throws", json={"pins": "many"})
    assert resp.status_code == 422

    data = client.get(f"{BASE}/{mid}").json()
    assert data["players"][0]["frames"][0]["throws"] == [10]
    assert data["remainingPins"] == 5


def test_throw_updates_frames_and_turn(client):
    mid = _ready_match(client)
    data = _throw(client, mid, 15).json()
    assert data["currentPlayer"] == "Bo"
    ada = data["players"][0]
    assert ada["frames"][0]["strike"] is True
    assert ada["frames"][0]["completed"] is True
    assert ada["score"] == 15

    data = _throw(client, mid, 7, 8).json()
    bo = data["players"][1]
    assert bo["frames"][0]["spare"] is True
    assert data["currentPlayer"] == "Ada"
    assert data["currentFrame"] == 2


def test_full_match_and_scoreboard(client):
    mid = _ready_match(client, "Ada", "Bo")
    for _ in range(4):
        _throw(client, mid, 15)  # Ada
        _throw(client, mid, 5, 5, 3)  # Bo

    data = _throw(client, mid, 15).json()
    assert data["currentPlayer"] == "Ada"
    assert data["players"][0]["needsBonusThrows"] is True
    assert data["remainingPins"] == 15

    _throw(client, mid, 15, 15, 15)
    data = _throw(client, mid, 5, 5, 3).json()
    assert data["complete"] is True
    assert data["currentPlayer"] is None

    resp = client.post(f"{BASE}/{mid}/throws", json={"pins": 1})
    assert resp.status_code == 409
    assert resp.json()["code"] == "game_complete"

    board = client.get(f"{BASE}/{mid}/scoreboard").json()
    assert [(e["rank"], e["name"], e["score"]) for e in board] == [
        (1, "Ada", 300),
        (2, "Bo", 65),
    ]
    assert board[0]["frameScores"] == [60, 120, 180, 240, 300]


@pytest.mark.parametrize("pins", [True, False, "5"])
def test_non_integer_pins_rejected(client, pins):
    mid = _ready_match(client)
    resp = client.post(f"{BASE}/{mid}/throws", json={"pins": pins})
    assert resp.status_code == 422

    data = client.get(f"{BASE}/{mid}").json()
    assert data["players"][0]["frames"][0]["throws"] == []
    assert data["currentPlayer"] == "Ada"
    assert data["remainingPins"] == 15
