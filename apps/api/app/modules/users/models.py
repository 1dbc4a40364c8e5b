from __future__ import annotations

from typing import Optional
from sqlmodel import SQLModel, Field


# shared identity table; written by the login service, read here
class User(SQLModel, table=True):
    __tablename__ = "users"

    id: str = Field(primary_key=True)
    discord_id: Optional[str] = Field(default=None, unique=True)
    username: str
    is_admin: bool = Field(default=False)
    roles_json: str = Field(default="[]")  # [{"id": "...", "name": "..."}] or ["..."]

    created_at: str
