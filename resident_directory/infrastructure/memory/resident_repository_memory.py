"""In-process resident store: a record map plus one uniqueness index per unique field."""

import itertools
import uuid
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Sequence

from resident_directory.application.resident_repository import (
    BulkInsertReport,
    InsertedRecord,
    RejectedRecord,
)
from resident_directory.domain.exceptions import (
    DomainValidationError,
    DuplicateResidentError,
    ResidentNotFoundError,
)
from resident_directory.domain.models.resident import (
    UNIQUE_FIELDS,
    Resident,
    ResidentDraft,
    ResidentSearchFilter,
)
from resident_directory.domain.validators.resident_validator import (
    apply_changes,
    changed_unique_fields,
    validate_resident_draft,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class InMemoryResidentRepository:
    """
    Implements ResidentRepository without external storage.

    Every check-and-write runs without an await in between, so each insert or
    update is atomic with respect to the unique indexes on the event loop.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self._clock = clock
        self._id_factory = id_factory
        self._records: Dict[str, Resident] = {}
        # field -> value -> owning resident id
        self._indexes: Dict[str, Dict[str, str]] = {name: {} for name in UNIQUE_FIELDS}
        # resident id -> mutation sequence, tie-breaker for equal timestamps
        self._sequence: Dict[str, int] = {}
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._records)

    def _conflicts(
        self,
        draft: ResidentDraft,
        fields: Sequence[str] = UNIQUE_FIELDS,
        exclude_id: Optional[str] = None,
    ) -> List[str]:
        taken = []
        for name in fields:
            owner = self._indexes[name].get(draft.value_of(name))
            if owner is not None and owner != exclude_id:
                taken.append(name)
        return taken

    def _index(self, resident: Resident) -> None:
        for name in UNIQUE_FIELDS:
            self._indexes[name][resident.value_of(name)] = resident.id

    def _unindex(self, resident: Resident) -> None:
        for name in UNIQUE_FIELDS:
            self._indexes[name].pop(resident.value_of(name), None)

    def _store(self, resident: Resident) -> None:
        self._records[resident.id] = resident
        self._sequence[resident.id] = next(self._counter)
        self._index(resident)

    def _insert_one(self, draft: ResidentDraft) -> Resident:
        conflicts = self._conflicts(draft)
        if conflicts:
            raise DuplicateResidentError(conflicts)
        validate_resident_draft(draft)
        now = self._clock()
        resident = Resident.from_draft(draft, self._id_factory(), created_at=now, updated_at=now)
        self._store(resident)
        return resident

    async def insert(self, draft: ResidentDraft) -> Resident:
        return self._insert_one(draft)

    async def insert_many(self, drafts: Sequence[ResidentDraft]) -> BulkInsertReport:
        report = BulkInsertReport()
        for index, draft in enumerate(drafts):
            try:
                report.add(InsertedRecord(index=index, resident=self._insert_one(draft)))
            except DuplicateResidentError as e:
                report.add(RejectedRecord(index=index, draft=draft, reason=e.message, field=e.field))
            except DomainValidationError as e:
                field = e.fields[0] if e.fields else None
                report.add(RejectedRecord(index=index, draft=draft, reason=e.message, field=field))
        return report

    async def get(self, resident_id: str) -> Optional[Resident]:
        return self._records.get(resident_id)

    def _newest_first(self, residents: List[Resident]) -> List[Resident]:
        return sorted(
            residents,
            key=lambda r: (r.updated_at, self._sequence[r.id]),
            reverse=True,
        )

    async def find_all(self) -> List[Resident]:
        return self._newest_first(list(self._records.values()))

    async def search(self, criteria: ResidentSearchFilter) -> List[Resident]:
        return self._newest_first([r for r in self._records.values() if criteria.matches(r)])

    async def update(self, resident_id: str, changes: dict) -> Resident:
        current = self._records.get(resident_id)
        if current is None:
            raise ResidentNotFoundError(resident_id)
        candidate = apply_changes(current.to_draft(), changes)
        changed = changed_unique_fields(current, candidate)
        conflicts = self._conflicts(candidate, fields=changed, exclude_id=resident_id)
        if conflicts:
            raise DuplicateResidentError(conflicts)
        validate_resident_draft(candidate)
        updated = Resident.from_draft(
            candidate,
            resident_id,
            created_at=current.created_at,
            updated_at=self._clock(),
        )
        self._unindex(current)
        self._store(updated)
        return updated

    async def delete(self, resident_id: str) -> None:
        resident = self._records.pop(resident_id, None)
        if resident is None:
            return
        self._unindex(resident)
        self._sequence.pop(resident_id, None)
