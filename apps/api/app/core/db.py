"""
DB utilities (sqlite default).

Defaults:
- DATABASE_URL: sqlite:///./data/app.db

The engine is opened by the application lifespan and kept on
``app.state.engine``; request handlers borrow one connection per request
through ``get_conn``.
"""
from __future__ import annotations

import os
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Connection, Engine
from sqlmodel import SQLModel

from app.core.config import get_database_url

_CROCKFORD32 = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"


def _encode_crockford(value: int, length: int) -> str:
    chars: List[str] = []
    for _ in range(length):
        chars.append(_CROCKFORD32[value & 31])
        value >>= 5
    return "".join(reversed(chars))


def new_ulid() -> str:
    # 48-bit time (ms) + 80-bit randomness
    ms = int(time.time() * 1000) & ((1 << 48) - 1)
    rnd = int.from_bytes(os.urandom(10), "big")
    v = (ms << 80) | rnd
    return _encode_crockford(v, 26)


def now_iso() -> str:
    # fixed width with microseconds: newest-first ordering sorts on this text
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def _repo_root() -> Path:
    # apps/api/app/core/db.py -> repo root = parents[4]
    return Path(__file__).resolve().parents[4]


def resolve_sqlite_path(database_url: str) -> Optional[Path]:
    if not database_url.startswith("sqlite:///"):
        return None
    p = database_url[len("sqlite:///") :]

    # absolute unix
    if p.startswith("/"):
        return Path(p)

    # absolute windows drive, both C:/ and C:\ forms
    if len(p) >= 3 and p[1] == ":" and (p[2] == "/" or p[2] == "\\"):
        return Path(p)

    # relative -> repo root
    return (_repo_root() / p).resolve()


def _enable_sqlite_fks(dbapi_conn: Any, _record: Any) -> None:
    cur = dbapi_conn.cursor()
    cur.execute("PRAGMA foreign_keys=ON")
    cur.close()


def open_engine(url: Optional[str] = None) -> Engine:
    url = url or get_database_url()

    if url.startswith("sqlite"):
        sp = resolve_sqlite_path(url)
        if sp is not None:
            sp.parent.mkdir(parents=True, exist_ok=True)
            url = "sqlite:///" + sp.as_posix()
        eng = create_engine(url, future=True, connect_args={"check_same_thread": False})
        event.listen(eng, "connect", _enable_sqlite_fks)
        return eng

    return create_engine(url, future=True, pool_pre_ping=True)


APPEND_ONLY_TABLES = ("civilian_citations", "civilian_arrests")


def install_append_only_triggers(conn: Connection) -> None:
    # sqlite only
    if conn.dialect.name != "sqlite":
        return
    for table in APPEND_ONLY_TABLES:
        for op, verb in (("UPDATE", "updated"), ("DELETE", "deleted")):
            conn.execute(
                text(
                    f"CREATE TRIGGER IF NOT EXISTS trg_{table}_no_{op.lower()} "
                    f"BEFORE {op} ON {table} "
                    f"BEGIN SELECT RAISE(ABORT, 'append-only: {table} cannot be {verb}'); END;"
                )
            )


def drop_append_only_triggers(conn: Connection) -> None:
    if conn.dialect.name != "sqlite":
        return
    for table in APPEND_ONLY_TABLES:
        conn.execute(text(f"DROP TRIGGER IF EXISTS trg_{table}_no_update"))
        conn.execute(text(f"DROP TRIGGER IF EXISTS trg_{table}_no_delete"))


def create_schema(engine: Engine) -> None:
    # table models register themselves on SQLModel.metadata at import
    import app.modules.users.models  # noqa: F401
    import app.modules.characters.models  # noqa: F401
    import app.modules.vehicles.models  # noqa: F401
    import app.modules.records.models  # noqa: F401
    import app.modules.warrants.models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    with engine.begin() as conn:
        install_append_only_triggers(conn)


def get_conn(request: Request) -> Iterator[Connection]:
    engine: Engine = request.app.state.engine
    with engine.begin() as conn:
        yield conn


def db_health(engine: Optional[Engine]) -> Dict[str, Any]:
    url = get_database_url()
    kind = "sqlite" if url.startswith("sqlite") else url.split(":", 1)[0]
    sp = resolve_sqlite_path(url)
    path = str(sp.as_posix()) if sp is not None else None

    if engine is None:
        return {"status": "error", "kind": kind, "path": path, "error": "engine not open"}
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "ok", "kind": kind, "path": path}
    except Exception as e:
        return {"status": "error", "kind": kind, "path": path, "error": str(e)}
