"""Domain layer: models, schemas, normalizer, validators, exceptions. Pure business logic only."""

from resident_directory.domain.exceptions import (
    DomainError,
    DomainValidationError,
    DuplicateResidentError,
    MalformedPayloadError,
    ResidentNotFoundError,
)
from resident_directory.domain.models import Resident, ResidentDraft, ResidentSearchFilter
from resident_directory.domain.normalizer import normalize_changes, normalize_resident
from resident_directory.domain.validators import validate_resident_draft

__all__ = [
    "DomainError",
    "DomainValidationError",
    "DuplicateResidentError",
    "MalformedPayloadError",
    "Resident",
    "ResidentDraft",
    "ResidentNotFoundError",
    "ResidentSearchFilter",
    "normalize_changes",
    "normalize_resident",
    "validate_resident_draft",
]
