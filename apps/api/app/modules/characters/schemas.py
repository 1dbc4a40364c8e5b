from __future__ import annotations

from typing import List, Literal, Optional
from pydantic import BaseModel, Field

from app.modules.records.schemas import ArrestOut, CitationOut
from app.modules.vehicles.schemas import VehicleOut
from app.modules.warrants.schemas import WarrantOut

DriversLicenseStatus = Literal["Valid", "Suspended", "Expired"]
FirearmsLicenseStatus = Literal["None", "Suspended", "Open Carry", "Concealed"]


# presence of required fields is checked by the service (400, no write)
class CharacterIn(BaseModel):
    name: Optional[str] = None
    date_of_birth: Optional[str] = None
    address: Optional[str] = None
    phone_number: Optional[str] = None
    profession: Optional[str] = None
    gender: Optional[str] = None
    race: Optional[str] = None
    hair_color: Optional[str] = None
    eye_color: Optional[str] = None
    height: Optional[str] = None
    weight: Optional[str] = None
    backstory: Optional[str] = None
    drivers_license_status: Optional[DriversLicenseStatus] = None
    firearms_license_status: Optional[FirearmsLicenseStatus] = None


class CharacterOut(BaseModel):
    id: str
    user_id: str
    name: str
    date_of_birth: str
    address: str
    phone_number: Optional[str] = None
    profession: str
    gender: str
    race: str
    hair_color: Optional[str] = None
    eye_color: Optional[str] = None
    height: Optional[str] = None
    weight: Optional[str] = None
    backstory: Optional[str] = None
    drivers_license_status: DriversLicenseStatus = "Valid"
    firearms_license_status: FirearmsLicenseStatus = "None"
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class CharacterSummaryOut(BaseModel):
    id: str
    name: str
    date_of_birth: str
    address: str


class CharacterDetailOut(BaseModel):
    character: CharacterOut
    vehicles: List[VehicleOut] = Field(default_factory=list)
    citations: List[CitationOut] = Field(default_factory=list)
    arrests: List[ArrestOut] = Field(default_factory=list)
    warrants: List[WarrantOut] = Field(default_factory=list)
    # camelCase on the wire: the UI keys its action buttons off these
    is_owner: bool = Field(serialization_alias="isOwner")
    has_leo_access: bool = Field(serialization_alias="hasLEOAccess")
    has_judge_access: bool = Field(serialization_alias="hasJudgeAccess")
