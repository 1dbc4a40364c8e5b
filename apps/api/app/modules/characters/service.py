from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import text
from sqlalchemy.engine import Connection

from app.core.access import Principal
from app.core.config import get_search_limit, get_search_min_query
from app.core.db import new_ulid, now_iso
from app.core.errors import Forbidden, Unauthorized, require_fields
from app.core.observability import emit
from app.modules.characters.queries import require_character
from app.modules.records.service import list_arrests, list_citations
from app.modules.vehicles.service import list_vehicles
from app.modules.warrants.service import list_warrants

CHARACTER_FIELDS = (
    "name",
    "date_of_birth",
    "address",
    "phone_number",
    "profession",
    "gender",
    "race",
    "hair_color",
    "eye_color",
    "height",
    "weight",
    "backstory",
    "drivers_license_status",
    "firearms_license_status",
)
REQUIRED_CHARACTER_FIELDS = ("name", "date_of_birth", "address", "profession", "gender", "race")

DEFAULT_DRIVERS_LICENSE_STATUS = "Valid"
DEFAULT_FIREARMS_LICENSE_STATUS = "None"


def _character_values(fields: Dict[str, Any]) -> Dict[str, Any]:
    require_fields(fields, REQUIRED_CHARACTER_FIELDS)

    values: Dict[str, Any] = {}
    for k in CHARACTER_FIELDS:
        v = fields.get(k)
        values[k] = v.strip() if isinstance(v, str) else v
    if not values["drivers_license_status"]:
        values["drivers_license_status"] = DEFAULT_DRIVERS_LICENSE_STATUS
    if not values["firearms_license_status"]:
        values["firearms_license_status"] = DEFAULT_FIREARMS_LICENSE_STATUS
    return values


def list_my_characters(conn: Connection, principal: Principal) -> List[Dict[str, Any]]:
    rows = conn.execute(
        text(
            "SELECT * FROM civilian_characters WHERE user_id = :uid "
            "ORDER BY created_at DESC, id DESC"
        ),
        {"uid": principal.user_id},
    ).mappings().all()
    return [dict(r) for r in rows]


def create_character(conn: Connection, principal: Optional[Principal], fields: Dict[str, Any]) -> str:
    if principal is None:
        raise Unauthorized("Authentication required")
    values = _character_values(fields)

    cid = new_ulid()
    now = now_iso()
    row = dict(values, id=cid, user_id=principal.user_id, created_at=now, updated_at=now)
    keys = sorted(row.keys())
    conn.execute(
        text(
            f"INSERT INTO civilian_characters ({', '.join(keys)}) "
            f"VALUES ({', '.join(':' + k for k in keys)})"
        ),
        row,
    )
    emit("info", "dmv.character.created", "character created", __name__, character_id=cid, user_id=principal.user_id)
    return cid


def get_character_bundle(conn: Connection, principal: Principal, character_id: str) -> Dict[str, Any]:
    """
    Character plus its vehicles, citations, arrests and warrants, newest first.

    A civilian looking at their own character only sees completed warrants;
    LEO and judges see every warrant.
    """
    character = require_character(conn, character_id)
    if not principal.can_view(character):
        raise Forbidden("Access denied")

    owner = principal.is_owner(character)
    completed_only = owner and not principal.is_law_enforcement

    return {
        "character": character,
        "vehicles": list_vehicles(conn, character_id),
        "citations": list_citations(conn, character_id),
        "arrests": list_arrests(conn, character_id),
        "warrants": list_warrants(conn, character_id, completed_only=completed_only),
        "is_owner": owner,
        "has_leo_access": principal.has_leo,
        "has_judge_access": principal.has_judge,
    }


def update_character(conn: Connection, principal: Principal, character_id: str, fields: Dict[str, Any]) -> None:
    character = require_character(conn, character_id)
    if not principal.can_edit(character):
        raise Forbidden("Access denied")

    values = _character_values(fields)
    values["updated_at"] = now_iso()
    sets = ", ".join(f"{k} = :{k}" for k in sorted(values.keys()))
    conn.execute(
        text(f"UPDATE civilian_characters SET {sets} WHERE id = :id"),
        dict(values, id=character_id),
    )
    emit(
        "info",
        "dmv.character.updated",
        "character updated",
        __name__,
        character_id=character_id,
        user_id=principal.user_id,
        as_judge=not principal.is_owner(character),
    )


def _like_pattern(query: str) -> str:
    escaped = query.replace("!", "!!").replace("%", "!%").replace("_", "!_")
    return f"%{escaped}%"


def search_characters(conn: Connection, principal: Principal, query: Optional[str]) -> List[Dict[str, Any]]:
    if not principal.is_law_enforcement:
        raise Forbidden("LEO access required")

    q = (query or "").strip()
    if len(q) < get_search_min_query():
        return []

    # one fold on both sides: sqlite LOWER only folds ASCII
    rows = conn.execute(
        text(
            "SELECT id, name, date_of_birth, address FROM civilian_characters "
            "WHERE LOWER(name) LIKE LOWER(:pattern) ESCAPE '!' "
            "OR LOWER(address) LIKE LOWER(:pattern) ESCAPE '!' "
            "ORDER BY name "
            "LIMIT :limit"
        ),
        {"pattern": _like_pattern(q), "limit": get_search_limit()},
    ).mappings().all()
    return [dict(r) for r in rows]
