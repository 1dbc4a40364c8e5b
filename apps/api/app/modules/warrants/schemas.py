from __future__ import annotations

from typing import Literal, Optional
from pydantic import BaseModel

WarrantStatus = Literal["Active", "Completed"]


class WarrantIn(BaseModel):
    charges: Optional[str] = None
    reason: Optional[str] = None


class WarrantOut(BaseModel):
    id: str
    character_id: str
    charges: str
    reason: str
    status: WarrantStatus
    issued_by: str
    issued_by_name: Optional[str] = None
    completed_by: Optional[str] = None
    completed_by_name: Optional[str] = None
    completed_at: Optional[str] = None
    created_at: Optional[str] = None
