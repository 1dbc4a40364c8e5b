from __future__ import annotations

from typing import Literal, Optional
from pydantic import BaseModel

RegistrationStatus = Literal["Valid", "Expired", "Suspended"]
InsuranceStatus = Literal["Valid", "Expired", "None"]


class VehicleIn(BaseModel):
    make: Optional[str] = None
    model: Optional[str] = None
    color: Optional[str] = None
    plate: Optional[str] = None
    registration_status: Optional[RegistrationStatus] = None
    insurance_status: Optional[InsuranceStatus] = None


class VehicleOut(BaseModel):
    id: str
    character_id: str
    make: str
    model: str
    color: str
    plate: str
    registration_status: RegistrationStatus = "Valid"
    insurance_status: InsuranceStatus = "Valid"
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
