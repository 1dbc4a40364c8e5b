from __future__ import annotations

from sqlmodel import SQLModel, Field


class Vehicle(SQLModel, table=True):
    __tablename__ = "civilian_vehicles"

    id: str = Field(primary_key=True)
    character_id: str = Field(foreign_key="civilian_characters.id", index=True)

    make: str
    model: str
    color: str
    # unique across all vehicles; the index is what makes concurrent adds safe
    plate: str = Field(unique=True)
    registration_status: str = Field(default="Valid")  # Valid|Expired|Suspended
    insurance_status: str = Field(default="Valid")  # Valid|Expired|None

    created_at: str
    updated_at: str
