"""
Citations and arrests: append-only history for a character.

Only LEO and judges write here; there is no update or delete.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy import text
from sqlalchemy.engine import Connection

from app.core.access import Principal
from app.core.db import new_ulid, now_iso
from app.core.errors import Forbidden, require_fields
from app.core.observability import emit
from app.modules.characters.queries import require_character


def _require_law_enforcement(principal: Principal) -> None:
    if not principal.is_law_enforcement:
        raise Forbidden("LEO access required")


_CENTS = Decimal("0.01")


def _fine_text(v: Any) -> str:
    return str(Decimal(str(v)).quantize(_CENTS))


def _row_to_citation(row: Any) -> Dict[str, Any]:
    d = dict(row)
    # sqlite hands NUMERIC back as float
    d["fine_amount"] = Decimal(str(d["fine_amount"])).quantize(_CENTS)
    return d


def list_citations(conn: Connection, character_id: str) -> List[Dict[str, Any]]:
    rows = conn.execute(
        text(
            "SELECT c.*, u.username AS issued_by_name "
            "FROM civilian_citations c "
            "LEFT JOIN users u ON c.issued_by = u.id "
            "WHERE c.character_id = :cid "
            "ORDER BY c.created_at DESC, c.id DESC"
        ),
        {"cid": character_id},
    ).mappings().all()
    return [_row_to_citation(r) for r in rows]


def list_arrests(conn: Connection, character_id: str) -> List[Dict[str, Any]]:
    rows = conn.execute(
        text(
            "SELECT a.*, u.username AS arrested_by_name "
            "FROM civilian_arrests a "
            "LEFT JOIN users u ON a.arrested_by = u.id "
            "WHERE a.character_id = :cid "
            "ORDER BY a.created_at DESC, a.id DESC"
        ),
        {"cid": character_id},
    ).mappings().all()
    return [dict(r) for r in rows]


def issue_citation(conn: Connection, principal: Principal, character_id: str, fields: Dict[str, Any]) -> str:
    _require_law_enforcement(principal)
    require_fields(fields, ("violation", "fine_amount"), "Violation and fine amount required")
    require_character(conn, character_id)

    cid = new_ulid()
    conn.execute(
        text(
            "INSERT INTO civilian_citations (id, character_id, violation, fine_amount, notes, issued_by, created_at) "
            "VALUES (:id, :character_id, :violation, :fine_amount, :notes, :issued_by, :created_at)"
        ),
        {
            "id": cid,
            "character_id": character_id,
            "violation": fields["violation"].strip(),
            "fine_amount": _fine_text(fields["fine_amount"]),
            "notes": fields.get("notes"),
            "issued_by": principal.user_id,
            "created_at": now_iso(),
        },
    )
    emit("info", "dmv.citation.issued", "citation issued", __name__, citation_id=cid, character_id=character_id, issued_by=principal.user_id)
    return cid


def file_arrest(conn: Connection, principal: Principal, character_id: str, fields: Dict[str, Any]) -> str:
    _require_law_enforcement(principal)
    require_fields(fields, ("charges", "location"), "Charges and location required")
    require_character(conn, character_id)

    aid = new_ulid()
    conn.execute(
        text(
            "INSERT INTO civilian_arrests (id, character_id, charges, location, notes, arrested_by, created_at) "
            "VALUES (:id, :character_id, :charges, :location, :notes, :arrested_by, :created_at)"
        ),
        {
            "id": aid,
            "character_id": character_id,
            "charges": fields["charges"].strip(),
            "location": fields["location"].strip(),
            "notes": fields.get("notes"),
            "arrested_by": principal.user_id,
            "created_at": now_iso(),
        },
    )
    emit("info", "dmv.arrest.filed", "arrest filed", __name__, arrest_id=aid, character_id=character_id, arrested_by=principal.user_id)
    return aid
