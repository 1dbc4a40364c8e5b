from __future__ import annotations

from typing import Optional
from sqlmodel import SQLModel, Field


# never hard-deleted
class Character(SQLModel, table=True):
    __tablename__ = "civilian_characters"

    id: str = Field(primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True)

    name: str = Field(index=True)
    date_of_birth: str
    address: str
    phone_number: Optional[str] = Field(default=None)
    profession: str
    gender: str
    race: str
    hair_color: Optional[str] = Field(default=None)
    eye_color: Optional[str] = Field(default=None)
    height: Optional[str] = Field(default=None)
    weight: Optional[str] = Field(default=None)
    backstory: Optional[str] = Field(default=None)

    drivers_license_status: str = Field(default="Valid")  # Valid|Suspended|Expired
    firearms_license_status: str = Field(default="None")  # None|Suspended|Open Carry|Concealed

    created_at: str
    updated_at: str
