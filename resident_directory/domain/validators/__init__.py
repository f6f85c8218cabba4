"""Domain validators. Pure validation functions."""

from resident_directory.domain.validators.resident_validator import (
    apply_changes,
    changed_unique_fields,
    missing_required_fields,
    validate_resident_draft,
)

__all__ = [
    "apply_changes",
    "changed_unique_fields",
    "missing_required_fields",
    "validate_resident_draft",
]
