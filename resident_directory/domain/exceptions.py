"""Domain-specific exceptions. Pure domain layer, no infrastructure."""

from typing import Iterable, Tuple


class DomainError(Exception):
    """Base for all domain-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DomainValidationError(DomainError):
    """Raised when a required resident field is missing or empty."""

    def __init__(self, message: str, fields: Iterable[str] = ()) -> None:
        self.fields: Tuple[str, ...] = tuple(fields)
        super().__init__(message)


class DuplicateResidentError(DomainError):
    """Raised when a unique field (car plate or permit number) is already taken."""

    def __init__(self, fields: Iterable[str]) -> None:
        self.fields: Tuple[str, ...] = tuple(fields)
        self.field = self.fields[0] if self.fields else ""
        super().__init__(f"{self.field} already exists")


class ResidentNotFoundError(DomainError):
    """Raised when a resident id does not exist."""

    def __init__(self, resident_id: str) -> None:
        self.resident_id = resident_id
        super().__init__(f"Resident {resident_id} not found")


class MalformedPayloadError(DomainError):
    """Raised when a sync payload is neither a list nor a {residents: [...]} object."""
