"""Validators for resident domain rules. Pure functions, no infrastructure or DB access."""

from dataclasses import replace
from typing import List, Mapping, Optional

from resident_directory.domain.exceptions import DomainValidationError
from resident_directory.domain.models.resident import (
    REQUIRED_FIELDS,
    UNIQUE_FIELDS,
    ResidentDraft,
)


def missing_required_fields(draft: ResidentDraft) -> List[str]:
    """Wire names of required fields that are empty."""
    return [name for name in REQUIRED_FIELDS if not draft.value_of(name)]


def validate_resident_draft(draft: ResidentDraft) -> None:
    """Every required field must be non-empty. Raises DomainValidationError listing the empty ones."""
    missing = missing_required_fields(draft)
    if missing:
        raise DomainValidationError(
            f"Missing required fields: {', '.join(missing)}",
            fields=missing,
        )


def apply_changes(draft: ResidentDraft, changes: Mapping[str, Optional[str]]) -> ResidentDraft:
    """Return draft with normalized partial changes (attribute names) applied."""
    return replace(draft, **changes)


def changed_unique_fields(before: ResidentDraft, after: ResidentDraft) -> List[str]:
    """Unique fields whose value differs between two versions of a record."""
    return [name for name in UNIQUE_FIELDS if before.value_of(name) != after.value_of(name)]
