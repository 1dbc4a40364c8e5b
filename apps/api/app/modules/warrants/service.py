"""
Warrants: issued by judges, completed by LEO or judges.

Lifecycle is Active -> Completed and nothing else. Completion is a single
guarded UPDATE, so two officers completing the same warrant cannot both
win: a repeat completion succeeds without rewriting, so the first
completer and timestamp are kept.
"""
from __future__ import annotations

from typing import Any, Dict, List

from sqlalchemy import text
from sqlalchemy.engine import Connection

from app.core.access import Principal
from app.core.db import new_ulid, now_iso
from app.core.errors import Forbidden, NotFound, require_fields
from app.core.observability import emit
from app.modules.characters.queries import require_character

STATUS_ACTIVE = "Active"
STATUS_COMPLETED = "Completed"


def list_warrants(conn: Connection, character_id: str, completed_only: bool = False) -> List[Dict[str, Any]]:
    sql = (
        "SELECT w.*, u.username AS issued_by_name, u2.username AS completed_by_name "
        "FROM civilian_warrants w "
        "LEFT JOIN users u ON w.issued_by = u.id "
        "LEFT JOIN users u2 ON w.completed_by = u2.id "
        "WHERE w.character_id = :cid"
    )
    args: Dict[str, Any] = {"cid": character_id}
    if completed_only:
        sql += " AND w.status = :status"
        args["status"] = STATUS_COMPLETED
    sql += " ORDER BY w.created_at DESC, w.id DESC"

    rows = conn.execute(text(sql), args).mappings().all()
    return [dict(r) for r in rows]


def issue_warrant(conn: Connection, principal: Principal, character_id: str, fields: Dict[str, Any]) -> str:
    if not principal.has_judge:
        raise Forbidden("Judge access required")
    require_fields(fields, ("charges", "reason"), "Charges and reason required")
    require_character(conn, character_id)

    wid = new_ulid()
    conn.execute(
        text(
            "INSERT INTO civilian_warrants (id, character_id, charges, reason, status, issued_by, created_at) "
            "VALUES (:id, :character_id, :charges, :reason, :status, :issued_by, :created_at)"
        ),
        {
            "id": wid,
            "character_id": character_id,
            "charges": fields["charges"].strip(),
            "reason": fields["reason"].strip(),
            "status": STATUS_ACTIVE,
            "issued_by": principal.user_id,
            "created_at": now_iso(),
        },
    )
    emit("info", "dmv.warrant.issued", "warrant issued", __name__, warrant_id=wid, character_id=character_id, issued_by=principal.user_id)
    return wid


def complete_warrant(conn: Connection, principal: Principal, warrant_id: str) -> None:
    if not principal.is_law_enforcement:
        raise Forbidden("LEO access required")

    res = conn.execute(
        text(
            "UPDATE civilian_warrants SET status = :completed, completed_by = :uid, completed_at = :now "
            "WHERE id = :id AND status = :active"
        ),
        {
            "completed": STATUS_COMPLETED,
            "active": STATUS_ACTIVE,
            "uid": principal.user_id,
            "now": now_iso(),
            "id": warrant_id,
        },
    )
    if res.rowcount == 1:
        emit("info", "dmv.warrant.completed", "warrant completed", __name__, warrant_id=warrant_id, completed_by=principal.user_id)
        return

    row = conn.execute(
        text("SELECT status FROM civilian_warrants WHERE id = :id"),
        {"id": warrant_id},
    ).first()
    if row is None:
        raise NotFound("Warrant not found")
    # already completed: keep the first completer
    emit("info", "dmv.warrant.complete_repeat", "warrant already completed", __name__, warrant_id=warrant_id, completed_by=principal.user_id)
