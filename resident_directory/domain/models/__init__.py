"""Domain models. Pure business entities."""

from resident_directory.domain.models.resident import (
    CAR_PLATE,
    PERMIT_NUMBER,
    REQUIRED_FIELDS,
    UNIQUE_FIELDS,
    Resident,
    ResidentDraft,
    ResidentSearchFilter,
)

__all__ = [
    "CAR_PLATE",
    "PERMIT_NUMBER",
    "REQUIRED_FIELDS",
    "UNIQUE_FIELDS",
    "Resident",
    "ResidentDraft",
    "ResidentSearchFilter",
]
