"""Pydantic schemas for the resident API. camelCase on the wire, snake_case in Python."""

from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from resident_directory.domain.models.resident import Resident


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class ResidentFields(_CamelModel):
    """
    Resident fields as sent by clients. Everything is optional here; required-field
    checks run after normalization so create, update and sync share one rule set.
    """

    full_name: Optional[str] = None
    section: Optional[str] = None
    building: Optional[str] = None
    door: Optional[str] = Field(None, validation_alias=AliasChoices("door", "doorNumber"))
    car_plate: Optional[str] = None
    permit_number: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("permitNumber", "numeroDeMacaron", "permit_number"),
    )
    phone_primary: Optional[str] = None
    phone_secondary: Optional[str] = None

    def to_raw(self) -> dict:
        """Only the fields the client actually sent, keyed by wire name."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class ResidentCreateRequest(ResidentFields):
    """Request schema for creating a resident."""


class ResidentUpdateRequest(ResidentFields):
    """Request schema for a partial update. Unsent fields are left untouched."""


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class ResidentResponse(_CamelModel):
    id: str
    full_name: str
    section: str
    building: str
    door: str
    car_plate: str
    permit_number: str
    phone_primary: str
    phone_secondary: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_resident(cls, resident: Resident) -> "ResidentResponse":
        return cls(
            id=resident.id,
            full_name=resident.full_name,
            section=resident.section,
            building=resident.building,
            door=resident.door,
            car_plate=resident.car_plate,
            permit_number=resident.permit_number,
            phone_primary=resident.phone_primary,
            phone_secondary=resident.phone_secondary,
            created_at=resident.created_at,
            updated_at=resident.updated_at,
        )


class SyncResponse(_CamelModel):
    """Outcome of a bulk sync. inserted_count is what the store actually persisted."""

    inserted_count: int
    rejected_count: int
    received: int
    residents: List[ResidentResponse] = Field(default_factory=list)


class DeleteResponse(BaseModel):
    success: bool = True
