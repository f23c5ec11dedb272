from __future__ import annotations

import logging

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from retro_chess.protocol.http.app import create_app
from retro_chess.protocol.http.logging_middleware import game_id_from_path


def test_error_envelope_for_http_exception() -> None:
    app: FastAPI = create_app()

    @app.get("/boom")
    def boom():  # type: ignore[no-redef]
        raise HTTPException(status_code=400, detail="oops")

    client = TestClient(app)
    r = client.get("/boom")
    assert r.status_code == 400
    body = r.json()
    assert "error" in body
    err = body["error"]
    assert err["code"] == "bad_request"
    assert err["message"] == "oops"
    assert err["type"] == "client_error"
    assert err["request_id"]


def test_unknown_route_is_enveloped() -> None:
    client = TestClient(create_app())
    r = client.get("/api/nope")
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "not_found"


def test_unhandled_exception_becomes_internal_error() -> None:
    app: FastAPI = create_app()

    @app.get("/crash")
    def crash():  # type: ignore[no-redef]
        raise RuntimeError("kaboom")

    client = TestClient(app, raise_server_exceptions=False)
    r = client.get("/crash")
    assert r.status_code == 500
    err = r.json()["error"]
    assert err["code"] == "internal_error"
    assert err["type"] == "server_error"
    assert "kaboom" not in err["message"]


def test_incoming_request_id_is_reused() -> None:
    client = TestClient(create_app())
    r = client.get("/api/games/missing/state", headers={"x-request-id": "ui-42"})
    assert r.status_code == 404
    assert r.headers["x-request-id"] == "ui-42"
    assert r.json()["error"]["request_id"] == "ui-42"


def test_game_id_from_path() -> None:
    assert game_id_from_path("/api/games/abc/state") == "abc"
    assert game_id_from_path("/api/games/abc") == "abc"
    assert game_id_from_path("/api/games") is None
    assert game_id_from_path("/healthz") is None


def test_response_log_carries_game_id(caplog: pytest.LogCaptureFixture) -> None:
    client = TestClient(create_app())
    game_id = client.post("/api/games").json()["game_id"]
    with caplog.at_level(logging.INFO, logger="retro_chess.protocol.http.logging_middleware"):
        client.get(f"/api/games/{game_id}/state", headers={"x-request-id": "ui-7"})
    responses = [r for r in caplog.records if r.getMessage() == "response"]
    assert responses
    assert responses[-1].game_id == game_id
    assert responses[-1].request_id == "ui-7"
    assert responses[-1].levelno == logging.INFO
