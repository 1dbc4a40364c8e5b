"""
Identity adapter.

The upstream authentication layer (Discord login, sessions) is not part of
this service. It forwards the authenticated user's id in ``X-User-Id``;
the user row, including its role list, is read from the shared ``users``
table.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import Depends, Request
from sqlalchemy import text
from sqlalchemy.engine import Connection

from app.core.access import Principal
from app.core.db import get_conn
from app.core.errors import Unauthorized

USER_HEADER = "X-User-Id"


def load_user(conn: Connection, user_id: str) -> Optional[Dict[str, Any]]:
    row = conn.execute(
        text("SELECT id, discord_id, username, is_admin, roles_json FROM users WHERE id = :id"),
        {"id": user_id},
    ).mappings().first()
    return dict(row) if row else None


def get_current_user(request: Request, conn: Connection = Depends(get_conn)) -> Optional[Dict[str, Any]]:
    raw = (request.headers.get(USER_HEADER) or "").strip()
    if not raw:
        return None
    return load_user(conn, raw)


def get_principal(user: Optional[Dict[str, Any]] = Depends(get_current_user)) -> Principal:
    if user is None:
        raise Unauthorized("Authentication required")
    return Principal.from_user(user)
