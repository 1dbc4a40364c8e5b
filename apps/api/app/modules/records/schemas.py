from __future__ import annotations

from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field


class CitationIn(BaseModel):
    violation: Optional[str] = None
    fine_amount: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    notes: Optional[str] = None


class CitationOut(BaseModel):
    id: str
    character_id: str
    violation: str
    fine_amount: Decimal
    notes: Optional[str] = None
    issued_by: str
    issued_by_name: Optional[str] = None
    created_at: Optional[str] = None


class ArrestIn(BaseModel):
    charges: Optional[str] = None
    location: Optional[str] = None
    notes: Optional[str] = None


class ArrestOut(BaseModel):
    id: str
    character_id: str
    charges: str
    location: str
    notes: Optional[str] = None
    arrested_by: str
    arrested_by_name: Optional[str] = None
    created_at: Optional[str] = None
