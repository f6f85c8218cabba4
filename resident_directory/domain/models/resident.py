"""Domain model for residents. Pure business semantics, no ORM or infrastructure."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

# Field names as exposed on the wire (camelCase). Domain attributes are snake_case.
FULL_NAME = "fullName"
SECTION = "section"
BUILDING = "building"
DOOR = "door"
CAR_PLATE = "carPlate"
PERMIT_NUMBER = "permitNumber"
PHONE_PRIMARY = "phonePrimary"
PHONE_SECONDARY = "phoneSecondary"

# wire name -> attribute name
FIELD_ATTRIBUTES = {
    FULL_NAME: "full_name",
    SECTION: "section",
    BUILDING: "building",
    DOOR: "door",
    CAR_PLATE: "car_plate",
    PERMIT_NUMBER: "permit_number",
    PHONE_PRIMARY: "phone_primary",
    PHONE_SECONDARY: "phone_secondary",
}

REQUIRED_FIELDS: Tuple[str, ...] = (
    FULL_NAME,
    SECTION,
    BUILDING,
    DOOR,
    CAR_PLATE,
    PERMIT_NUMBER,
    PHONE_PRIMARY,
)

# Order matters: a record colliding on both reports the car plate first.
UNIQUE_FIELDS: Tuple[str, ...] = (CAR_PLATE, PERMIT_NUMBER)


@dataclass(frozen=True)
class ResidentDraft:
    """Normalized candidate record, not yet persisted."""

    full_name: str
    section: str
    building: str
    door: str
    car_plate: str
    permit_number: str
    phone_primary: str
    phone_secondary: Optional[str] = None

    def value_of(self, wire_name: str) -> Optional[str]:
        return getattr(self, FIELD_ATTRIBUTES[wire_name])


@dataclass(frozen=True)
class Resident(ResidentDraft):
    """Persisted resident. id is assigned by the store once and never changes."""

    id: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_draft(
        cls,
        draft: ResidentDraft,
        resident_id: str,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Resident":
        return cls(
            full_name=draft.full_name,
            section=draft.section,
            building=draft.building,
            door=draft.door,
            car_plate=draft.car_plate,
            permit_number=draft.permit_number,
            phone_primary=draft.phone_primary,
            phone_secondary=draft.phone_secondary,
            id=resident_id,
            created_at=created_at,
            updated_at=updated_at,
        )

    def to_draft(self) -> ResidentDraft:
        return ResidentDraft(
            full_name=self.full_name,
            section=self.section,
            building=self.building,
            door=self.door,
            car_plate=self.car_plate,
            permit_number=self.permit_number,
            phone_primary=self.phone_primary,
            phone_secondary=self.phone_secondary,
        )


@dataclass(frozen=True)
class ResidentSearchFilter:
    """
    Search criteria. Absent (None) fields impose no constraint; all present fields are ANDed.
    building and door only apply together: one without the other is ignored.
    """

    section: Optional[str] = None
    building: Optional[str] = None
    door: Optional[str] = None
    car_plate: Optional[str] = None
    permit_number: Optional[str] = None
    full_name: Optional[str] = None

    @property
    def location(self) -> Optional[Tuple[str, str]]:
        """(building, door) when both are set, else None."""
        if self.building and self.door:
            return (self.building, self.door)
        return None

    @property
    def is_empty(self) -> bool:
        return not (
            self.section
            or self.location
            or self.car_plate
            or self.permit_number
            or self.full_name
        )

    def matches(self, resident: Resident) -> bool:
        """In-process evaluation of the filter against one resident."""
        if self.section and resident.section != self.section:
            return False
        if self.location and (resident.building, resident.door) != self.location:
            return False
        if self.car_plate and resident.car_plate != self.car_plate:
            return False
        if self.permit_number and resident.permit_number != self.permit_number:
            return False
        if self.full_name and self.full_name.lower() not in resident.full_name.lower():
            return False
        return True
