from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.engine import Connection

from app.core.access import Principal
from app.core.auth import get_principal
from app.core.db import get_conn
from app.core.schemas import ERROR_RESPONSES, MutationOut

from .schemas import WarrantIn
from .service import complete_warrant, issue_warrant

router = APIRouter(tags=["warrants"], responses=ERROR_RESPONSES)


@router.post("/characters/{character_id}/warrants", response_model=MutationOut, response_model_exclude_none=True)
def api_issue_warrant(
    character_id: str,
    body: WarrantIn,
    principal: Principal = Depends(get_principal),
    conn: Connection = Depends(get_conn),
) -> MutationOut:
    return MutationOut(id=issue_warrant(conn, principal, character_id, body.model_dump()))


@router.put("/warrants/{warrant_id}/complete", response_model=MutationOut, response_model_exclude_none=True)
def api_complete_warrant(
    warrant_id: str,
    principal: Principal = Depends(get_principal),
    conn: Connection = Depends(get_conn),
) -> MutationOut:
    complete_warrant(conn, principal, warrant_id)
    return MutationOut(id=warrant_id)
