from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from retro_chess.engine.game import apply_move, new_game
from retro_chess.engine.move import parse_uci
from retro_chess.protocol.http.app import create_app
from retro_chess.protocol.http.session import InMemorySessionStore


def _client() -> TestClient:
    return TestClient(create_app())


def test_create_game_and_get_state() -> None:
    client = _client()
    r = client.post("/api/games")
    assert r.status_code == 200
    body = r.json()
    assert "game_id" in body and isinstance(body["game_id"], str) and body["game_id"]
    game_id = body["game_id"]
    assert body["turn"] == "w"
    assert body["castling"] == "KQkq"
    assert body["en_passant"] is None
    assert body["result"] == {"status": "ongoing", "winner": None, "in_check": False, "reason": None}
    assert len(body["board"]) == 32
    assert body["board"]["e1"] == {"color": "w", "kind": "k", "glyph": "♔"}
    assert body["board"]["d8"]["kind"] == "q"
    assert body["material"] == {"w": 39, "b": 39}
    assert body["moves"] == [] and body["last_move"] is None
    assert body["can_undo"] is False

    # Fetch state
    r2 = client.get(f"/api/games/{game_id}/state")
    assert r2.status_code == 200
    state = r2.json()
    assert state["game_id"] == game_id
    assert state == body


def test_get_state_unknown_id_404() -> None:
    client = _client()
    r = client.get("/api/games/does-not-exist/state")
    assert r.status_code == 404
    body = r.json()
    assert "error" in body
    assert body["error"]["code"] == "not_found"


def test_games_are_independent() -> None:
    client = _client()
    a = client.post("/api/games").json()["game_id"]
    b = client.post("/api/games").json()["game_id"]
    assert a != b
    client.post(f"/api/games/{a}/move", json={"uci": "e2e4"})
    assert client.get(f"/api/games/{a}/state").json()["turn"] == "b"
    assert client.get(f"/api/games/{b}/state").json()["turn"] == "w"


def test_delete_game() -> None:
    client = _client()
    game_id = client.post("/api/games").json()["game_id"]
    r = client.delete(f"/api/games/{game_id}")
    assert r.status_code == 204
    assert client.get(f"/api/games/{game_id}/state").status_code == 404
    r_again = client.delete(f"/api/games/{game_id}")
    assert r_again.status_code == 404
    assert r_again.json()["error"]["code"] == "not_found"


def test_store_replace_and_delete() -> None:
    store = InMemorySessionStore()
    gid = store.create()
    assert len(store) == 1
    start = store.get(gid)
    assert start is not None

    nxt = apply_move(start, parse_uci("e2e4"))
    store.replace(gid, nxt)
    assert store.get(gid) is nxt

    with pytest.raises(KeyError):
        store.replace("missing", new_game())

    assert store.delete(gid) is True
    assert store.delete(gid) is False
    assert store.get(gid) is None
    assert len(store) == 0
