from __future__ import annotations

from fastapi import APIRouter, Depends

from app.core.access import Principal
from app.core.auth import get_principal

from .schemas import AccessOut

router = APIRouter(tags=["access"])


@router.get("/access", response_model=AccessOut)
def api_access(principal: Principal = Depends(get_principal)) -> AccessOut:
    # lets the UI decide on the search tab before any character is opened
    return AccessOut(
        user_id=principal.user_id,
        username=principal.username,
        is_admin=principal.is_admin,
        has_leo_access=principal.has_leo,
        has_judge_access=principal.has_judge,
    )
