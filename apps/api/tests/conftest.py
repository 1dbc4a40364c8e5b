"""Fixtures: a throwaway sqlite database per test, seeded users, and a client.

Users:
- civ / civ2: plain civilians
- leo: carries the LEO role (as a role object)
- judge: carries the judge role (as a bare role id)
- admin: no roles, is_admin=1
"""
from __future__ import annotations

import json
from typing import Any, Dict, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import text
from sqlalchemy.engine import Engine

from app.core.access import Principal
from app.core.db import create_schema, now_iso, open_engine

LEO_ROLE = "111111111111111111"
JUDGE_ROLE = "222222222222222222"
PREFIX = "/api/dmv"

USERS: Dict[str, Dict[str, Any]] = {
    "civ": {"id": "u-civ", "discord_id": "1001", "username": "jane", "is_admin": False, "roles": [{"id": "999", "name": "Civilian"}]},
    "civ2": {"id": "u-civ2", "discord_id": "1002", "username": "john", "is_admin": False, "roles": []},
    "leo": {"id": "u-leo", "discord_id": "1003", "username": "officer", "is_admin": False, "roles": [{"id": LEO_ROLE, "name": "LEO"}]},
    "judge": {"id": "u-judge", "discord_id": "1004", "username": "judy", "is_admin": False, "roles": [JUDGE_ROLE]},
    "admin": {"id": "u-admin", "discord_id": "1005", "username": "root", "is_admin": True, "roles": []},
}

JANE = {
    "name": "Jane Doe",
    "date_of_birth": "1990-01-01",
    "address": "1 Main St",
    "profession": "Baker",
    "gender": "Female",
    "race": "Human",
}


def as_user(key: str) -> Dict[str, str]:
    return {"X-User-Id": USERS[key]["id"]}


def principal(key: str) -> Principal:
    return Principal.from_user(USERS[key], LEO_ROLE, JUDGE_ROLE)


@pytest.fixture
def db_url(tmp_path, monkeypatch) -> str:
    url = "sqlite:///" + (tmp_path / "dmv.db").as_posix()
    monkeypatch.setenv("DATABASE_URL", url)
    monkeypatch.setenv("LEO_ROLE_ID", LEO_ROLE)
    monkeypatch.setenv("JUDGE_ROLE_ID", JUDGE_ROLE)
    return url


@pytest.fixture
def engine(db_url: str) -> Iterator[Engine]:
    eng = open_engine(db_url)
    create_schema(eng)
    with eng.begin() as conn:
        for u in USERS.values():
            conn.execute(
                text(
                    "INSERT INTO users (id, discord_id, username, is_admin, roles_json, created_at) "
                    "VALUES (:id, :discord_id, :username, :is_admin, :roles_json, :created_at)"
                ),
                {
                    "id": u["id"],
                    "discord_id": u["discord_id"],
                    "username": u["username"],
                    "is_admin": u["is_admin"],
                    "roles_json": json.dumps(u["roles"]),
                    "created_at": now_iso(),
                },
            )
    yield eng
    eng.dispose()


@pytest.fixture
def client(engine: Engine) -> Iterator[TestClient]:
    from app.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def jane_id(client: TestClient) -> str:
    r = client.post(f"{PREFIX}/characters", json=JANE, headers=as_user("civ"))
    assert r.status_code == 200, r.text
    return r.json()["id"]
