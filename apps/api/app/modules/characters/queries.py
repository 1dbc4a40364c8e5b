from __future__ import annotations

from typing import Any, Dict, Optional

from sqlalchemy import text
from sqlalchemy.engine import Connection

from app.core.errors import NotFound


def get_character_row(conn: Connection, character_id: str) -> Optional[Dict[str, Any]]:
    row = conn.execute(
        text("SELECT * FROM civilian_characters WHERE id = :id"),
        {"id": character_id},
    ).mappings().first()
    return dict(row) if row else None


def require_character(conn: Connection, character_id: str) -> Dict[str, Any]:
    c = get_character_row(conn, character_id)
    if c is None:
        raise NotFound("Character not found")
    return c
