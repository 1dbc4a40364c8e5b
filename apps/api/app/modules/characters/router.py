from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.engine import Connection

from app.core.access import Principal
from app.core.auth import get_principal
from app.core.db import get_conn
from app.core.schemas import ERROR_RESPONSES, MutationOut

from .schemas import CharacterDetailOut, CharacterIn, CharacterOut, CharacterSummaryOut
from .service import (
    create_character,
    get_character_bundle,
    list_my_characters,
    search_characters,
    update_character,
)

router = APIRouter(tags=["characters"], responses=ERROR_RESPONSES)


@router.get("/characters", response_model=List[CharacterOut])
def api_list_characters(
    principal: Principal = Depends(get_principal),
    conn: Connection = Depends(get_conn),
) -> List[CharacterOut]:
    return list_my_characters(conn, principal)


@router.post("/characters", response_model=MutationOut, response_model_exclude_none=True)
def api_create_character(
    body: CharacterIn,
    principal: Principal = Depends(get_principal),
    conn: Connection = Depends(get_conn),
) -> MutationOut:
    cid = create_character(conn, principal, body.model_dump())
    return MutationOut(id=cid)


@router.get("/characters/{character_id}", response_model=CharacterDetailOut)
def api_get_character(
    character_id: str = Path(...),
    principal: Principal = Depends(get_principal),
    conn: Connection = Depends(get_conn),
) -> CharacterDetailOut:
    return CharacterDetailOut(**get_character_bundle(conn, principal, character_id))


@router.put("/characters/{character_id}", response_model=MutationOut, response_model_exclude_none=True)
def api_update_character(
    character_id: str,
    body: CharacterIn,
    principal: Principal = Depends(get_principal),
    conn: Connection = Depends(get_conn),
) -> MutationOut:
    update_character(conn, principal, character_id, body.model_dump())
    return MutationOut()


@router.get("/search", response_model=List[CharacterSummaryOut])
def api_search_characters(
    query: Optional[str] = Query(None, description="name or address fragment (min 2 chars)"),
    principal: Principal = Depends(get_principal),
    conn: Connection = Depends(get_conn),
) -> List[CharacterSummaryOut]:
    return search_characters(conn, principal, query)
