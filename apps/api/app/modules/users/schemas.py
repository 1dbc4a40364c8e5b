from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field


class AccessOut(BaseModel):
    user_id: str = Field(serialization_alias="userId")
    username: Optional[str] = None
    is_admin: bool = Field(serialization_alias="isAdmin")
    has_leo_access: bool = Field(serialization_alias="hasLEOAccess")
    has_judge_access: bool = Field(serialization_alias="hasJudgeAccess")
