from __future__ import annotations

from typing import Optional
from sqlmodel import SQLModel, Field


# Active -> Completed, once; completed_by/completed_at are set together
class Warrant(SQLModel, table=True):
    __tablename__ = "civilian_warrants"

    id: str = Field(primary_key=True)
    character_id: str = Field(foreign_key="civilian_characters.id", index=True)
    charges: str
    reason: str
    status: str = Field(default="Active", index=True)  # Active|Completed
    issued_by: str = Field(foreign_key="users.id")
    completed_by: Optional[str] = Field(default=None, foreign_key="users.id")
    completed_at: Optional[str] = Field(default=None)

    created_at: str
