from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import IntegrityError

from app.core.access import Principal
from app.core.db import new_ulid, now_iso
from app.core.errors import Conflict, Forbidden, NotFound, require_fields
from app.core.observability import emit
from app.modules.characters.queries import get_character_row, require_character

REQUIRED_VEHICLE_FIELDS = ("make", "model", "color", "plate")
DEFAULT_REGISTRATION_STATUS = "Valid"
DEFAULT_INSURANCE_STATUS = "Valid"


def _vehicle_values(fields: Dict[str, Any]) -> Dict[str, Any]:
    require_fields(fields, REQUIRED_VEHICLE_FIELDS)
    return {
        "make": fields["make"].strip(),
        "model": fields["model"].strip(),
        "color": fields["color"].strip(),
        "plate": fields["plate"].strip(),
        "registration_status": fields.get("registration_status") or DEFAULT_REGISTRATION_STATUS,
        "insurance_status": fields.get("insurance_status") or DEFAULT_INSURANCE_STATUS,
    }


def _plate_taken(conn: Connection, plate: str, exclude_vehicle_id: Optional[str] = None) -> bool:
    sql = "SELECT id FROM civilian_vehicles WHERE plate = :plate"
    args: Dict[str, Any] = {"plate": plate}
    if exclude_vehicle_id is not None:
        sql += " AND id != :vid"
        args["vid"] = exclude_vehicle_id
    return conn.execute(text(sql + " LIMIT 1"), args).first() is not None


def _plate_conflict(plate: str) -> Conflict:
    emit("warning", "dmv.vehicle.conflict", "plate already registered", __name__, plate=plate)
    return Conflict("License plate already registered", details={"plate": plate})


def get_vehicle_row(conn: Connection, vehicle_id: str) -> Optional[Dict[str, Any]]:
    row = conn.execute(
        text("SELECT * FROM civilian_vehicles WHERE id = :id"),
        {"id": vehicle_id},
    ).mappings().first()
    return dict(row) if row else None


def _require_editable_vehicle(conn: Connection, principal: Principal, vehicle_id: str) -> Dict[str, Any]:
    vehicle = get_vehicle_row(conn, vehicle_id)
    if vehicle is None:
        raise NotFound("Vehicle not found")
    character = get_character_row(conn, vehicle["character_id"]) or {}
    if not principal.can_edit(character):
        raise Forbidden("Access denied")
    return vehicle


def list_vehicles(conn: Connection, character_id: str) -> List[Dict[str, Any]]:
    rows = conn.execute(
        text(
            "SELECT * FROM civilian_vehicles WHERE character_id = :cid "
            "ORDER BY created_at DESC, id DESC"
        ),
        {"cid": character_id},
    ).mappings().all()
    return [dict(r) for r in rows]


def add_vehicle(conn: Connection, principal: Principal, character_id: str, fields: Dict[str, Any]) -> str:
    character = require_character(conn, character_id)
    if not principal.can_edit(character):
        raise Forbidden("Access denied")

    values = _vehicle_values(fields)
    # fast path; the unique index on plate settles concurrent adds
    if _plate_taken(conn, values["plate"]):
        raise _plate_conflict(values["plate"])

    vid = new_ulid()
    now = now_iso()
    row = dict(values, id=vid, character_id=character_id, created_at=now, updated_at=now)
    keys = sorted(row.keys())
    try:
        conn.execute(
            text(
                f"INSERT INTO civilian_vehicles ({', '.join(keys)}) "
                f"VALUES ({', '.join(':' + k for k in keys)})"
            ),
            row,
        )
    except IntegrityError as e:
        raise _plate_conflict(values["plate"]) from e

    emit("info", "dmv.vehicle.added", "vehicle added", __name__, vehicle_id=vid, character_id=character_id)
    return vid


def update_vehicle(conn: Connection, principal: Principal, vehicle_id: str, fields: Dict[str, Any]) -> None:
    _require_editable_vehicle(conn, principal, vehicle_id)

    values = _vehicle_values(fields)
    if _plate_taken(conn, values["plate"], exclude_vehicle_id=vehicle_id):
        raise _plate_conflict(values["plate"])

    values["updated_at"] = now_iso()
    sets = ", ".join(f"{k} = :{k}" for k in sorted(values.keys()))
    try:
        conn.execute(
            text(f"UPDATE civilian_vehicles SET {sets} WHERE id = :id"),
            dict(values, id=vehicle_id),
        )
    except IntegrityError as e:
        raise _plate_conflict(values["plate"]) from e

    emit("info", "dmv.vehicle.updated", "vehicle updated", __name__, vehicle_id=vehicle_id)


def delete_vehicle(conn: Connection, principal: Principal, vehicle_id: str) -> None:
    _require_editable_vehicle(conn, principal, vehicle_id)
    conn.execute(text("DELETE FROM civilian_vehicles WHERE id = :id"), {"id": vehicle_id})
    emit("info", "dmv.vehicle.deleted", "vehicle deleted", __name__, vehicle_id=vehicle_id)
