from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.engine import Connection

from app.core.access import Principal
from app.core.auth import get_principal
from app.core.db import get_conn
from app.core.schemas import ERROR_RESPONSES, MutationOut

from .schemas import ArrestIn, CitationIn
from .service import file_arrest, issue_citation

router = APIRouter(tags=["records"], responses=ERROR_RESPONSES)


@router.post("/characters/{character_id}/citations", response_model=MutationOut, response_model_exclude_none=True)
def api_issue_citation(
    character_id: str,
    body: CitationIn,
    principal: Principal = Depends(get_principal),
    conn: Connection = Depends(get_conn),
) -> MutationOut:
    return MutationOut(id=issue_citation(conn, principal, character_id, body.model_dump()))


@router.post("/characters/{character_id}/arrests", response_model=MutationOut, response_model_exclude_none=True)
def api_file_arrest(
    character_id: str,
    body: ArrestIn,
    principal: Principal = Depends(get_principal),
    conn: Connection = Depends(get_conn),
) -> MutationOut:
    return MutationOut(id=file_arrest(conn, principal, character_id, body.model_dump()))
