from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.engine import Connection

from app.core.access import Principal
from app.core.auth import get_principal
from app.core.db import get_conn
from app.core.schemas import ERROR_RESPONSES, MutationOut

from .schemas import VehicleIn
from .service import add_vehicle, delete_vehicle, update_vehicle

router = APIRouter(tags=["vehicles"], responses=ERROR_RESPONSES)


@router.post("/characters/{character_id}/vehicles", response_model=MutationOut, response_model_exclude_none=True)
def api_add_vehicle(
    character_id: str,
    body: VehicleIn,
    principal: Principal = Depends(get_principal),
    conn: Connection = Depends(get_conn),
) -> MutationOut:
    return MutationOut(id=add_vehicle(conn, principal, character_id, body.model_dump()))


@router.put("/vehicles/{vehicle_id}", response_model=MutationOut, response_model_exclude_none=True)
def api_update_vehicle(
    vehicle_id: str,
    body: VehicleIn,
    principal: Principal = Depends(get_principal),
    conn: Connection = Depends(get_conn),
) -> MutationOut:
    update_vehicle(conn, principal, vehicle_id, body.model_dump())
    return MutationOut()


@router.delete("/vehicles/{vehicle_id}", response_model=MutationOut, response_model_exclude_none=True)
def api_delete_vehicle(
    vehicle_id: str,
    principal: Principal = Depends(get_principal),
    conn: Connection = Depends(get_conn),
) -> MutationOut:
    delete_vehicle(conn, principal, vehicle_id)
    return MutationOut()
