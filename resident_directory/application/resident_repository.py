"""Resident repository protocol. Application layer depends on this; infrastructure implements it."""

from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence, Union

from resident_directory.domain.models.resident import (
    Resident,
    ResidentDraft,
    ResidentSearchFilter,
)


@dataclass(frozen=True)
class InsertedRecord:
    """One bulk candidate that the store persisted."""

    index: int
    resident: Resident


@dataclass(frozen=True)
class RejectedRecord:
    """One bulk candidate the store refused. field is set for uniqueness and validation failures."""

    index: int
    draft: ResidentDraft
    reason: str
    field: Optional[str] = None


InsertOutcome = Union[InsertedRecord, RejectedRecord]


@dataclass
class BulkInsertReport:
    """Per-candidate outcomes of an unordered insert_many, in submission order."""

    outcomes: List[InsertOutcome] = field(default_factory=list)

    def add(self, outcome: InsertOutcome) -> None:
        self.outcomes.append(outcome)

    @property
    def inserted(self) -> List[Resident]:
        return [o.resident for o in self.outcomes if isinstance(o, InsertedRecord)]

    @property
    def failures(self) -> List[RejectedRecord]:
        return [o for o in self.outcomes if isinstance(o, RejectedRecord)]

    @property
    def inserted_count(self) -> int:
        return len(self.inserted)


class ResidentRepository(Protocol):
    """
    Protocol for the resident record store. Enforces two independent unique
    constraints (car plate, permit number) on insert and update.
    """

    async def insert(self, draft: ResidentDraft) -> Resident:
        """Persist one record. Raises DuplicateResidentError, then DomainValidationError."""
        ...

    async def insert_many(self, drafts: Sequence[ResidentDraft]) -> BulkInsertReport:
        """Attempt every draft independently; a rejected draft never stops the rest."""
        ...

    async def get(self, resident_id: str) -> Optional[Resident]:
        ...

    async def find_all(self) -> List[Resident]:
        """All records, most recently updated first."""
        ...

    async def search(self, criteria: ResidentSearchFilter) -> List[Resident]:
        ...

    async def update(self, resident_id: str, changes: dict) -> Resident:
        """Apply normalized partial changes. Raises ResidentNotFoundError or DuplicateResidentError."""
        ...

    async def delete(self, resident_id: str) -> None:
        """Remove a record if present. Absent ids are not an error."""
        ...
