from __future__ import annotations

import json
import logging

from conftest import JANE, PREFIX, as_user


def test_health_reports_db(client) -> None:
    r = client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "ok"
    assert body["db"]["status"] == "ok"
    assert body["db"]["kind"] == "sqlite"
    assert "version" in body


def test_request_id_is_echoed(client) -> None:
    r = client.get("/health", headers={"X-Request-Id": "REQ-1"})
    assert r.headers["X-Request-Id"] == "REQ-1"

    r = client.get("/health")
    assert r.headers["X-Request-Id"]


def test_error_envelope_carries_request_id(client) -> None:
    r = client.get(f"{PREFIX}/characters", headers={"X-Request-Id": "REQ-2"})
    assert r.status_code == 401
    body = r.json()
    assert set(body.keys()) == {"error", "message", "request_id", "details"}
    assert body["request_id"] == "REQ-2"
    assert r.headers["X-Request-Id"] == "REQ-2"


def test_access_flags(client) -> None:
    r = client.get(f"{PREFIX}/access", headers=as_user("leo"))
    assert r.status_code == 200
    assert r.json() == {
        "userId": "u-leo",
        "username": "officer",
        "isAdmin": False,
        "hasLEOAccess": True,
        "hasJudgeAccess": False,
    }

    r = client.get(f"{PREFIX}/access", headers=as_user("civ"))
    assert r.json()["hasLEOAccess"] is False
    assert r.json()["hasJudgeAccess"] is False


def test_role_ids_come_from_environment(client, monkeypatch) -> None:
    monkeypatch.setenv("LEO_ROLE_ID", "999")
    r = client.get(f"{PREFIX}/access", headers=as_user("civ"))
    assert r.json()["hasLEOAccess"] is True


def test_mutations_emit_events(client, caplog) -> None:
    caplog.set_level(logging.INFO, logger="app")
    r = client.post(f"{PREFIX}/characters", json=dict(JANE, name="Logged"), headers=as_user("civ"))
    assert r.status_code == 200

    events = [json.loads(rec.getMessage()) for rec in caplog.records if rec.name == "app"]
    created = [e for e in events if e["event"] == "dmv.character.created"]
    assert len(created) == 1
    assert created[0]["character_id"] == r.json()["id"]
    assert "name" not in created[0]
