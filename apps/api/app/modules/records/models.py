from __future__ import annotations

from decimal import Decimal
from typing import Optional

from sqlalchemy import CheckConstraint, Column, Numeric
from sqlmodel import SQLModel, Field


# append-only (enforced by SQLite triggers in migration)
class Citation(SQLModel, table=True):
    __tablename__ = "civilian_citations"
    __table_args__ = (CheckConstraint("fine_amount >= 0", name="ck_civilian_citations_fine_non_negative"),)

    id: str = Field(primary_key=True)
    character_id: str = Field(foreign_key="civilian_characters.id", index=True)
    violation: str
    fine_amount: Decimal = Field(sa_column=Column(Numeric(10, 2), nullable=False))
    notes: Optional[str] = Field(default=None)
    issued_by: str = Field(foreign_key="users.id")

    created_at: str


# append-only (enforced by SQLite triggers in migration)
class Arrest(SQLModel, table=True):
    __tablename__ = "civilian_arrests"

    id: str = Field(primary_key=True)
    character_id: str = Field(foreign_key="civilian_characters.id", index=True)
    charges: str
    location: str
    notes: Optional[str] = Field(default=None)
    arrested_by: str = Field(foreign_key="users.id")

    created_at: str
