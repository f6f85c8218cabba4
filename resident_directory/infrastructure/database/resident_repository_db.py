"""DB-backed resident repository. Persists residents to the residents table."""

import logging
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Callable, Iterator, List, Optional, Sequence

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from resident_directory.application.exceptions import StorageUnavailableError
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
    CAR_PLATE,
    PERMIT_NUMBER,
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
from resident_directory.infrastructure.database.models import ResidentRow

_LIKE_ESCAPE = "\\"

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite hands back naive datetimes; every stored timestamp is UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _escape_like(value: str) -> str:
    return (
        value.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )


def _row_to_resident(row: ResidentRow) -> Resident:
    return Resident(
        id=row.id,
        full_name=row.full_name,
        section=row.section,
        building=row.building,
        door=row.door,
        car_plate=row.car_plate,
        permit_number=row.permit_number,
        phone_primary=row.phone_primary,
        phone_secondary=row.phone_secondary,
        created_at=_as_utc(row.created_at),
        updated_at=_as_utc(row.updated_at),
    )


@contextmanager
def _storage_errors() -> Iterator[None]:
    """Translate connectivity failures from the driver into StorageUnavailableError."""
    try:
        yield
    except (OperationalError, InterfaceError, OSError) as e:
        raise StorageUnavailableError(f"Resident store unavailable: {e}") from e


class DbResidentRepository:
    """
    Implements ResidentRepository on SQLAlchemy. Uniqueness is enforced by the
    table's unique constraints; every record is committed on its own, so a
    bulk insert is applied record by record and may be partially persisted.
    """

    def __init__(
        self,
        session: AsyncSession,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._session = session
        self._clock = clock

    async def _find_conflicts(
        self,
        draft: ResidentDraft,
        fields: Sequence[str] = UNIQUE_FIELDS,
        exclude_id: Optional[str] = None,
    ) -> List[str]:
        """Unique fields of draft already held by another row, in UNIQUE_FIELDS order."""
        if not fields:
            return []
        stmt = select(ResidentRow.car_plate, ResidentRow.permit_number).where(
            or_(
                ResidentRow.car_plate == draft.car_plate,
                ResidentRow.permit_number == draft.permit_number,
            )
        )
        if exclude_id is not None:
            stmt = stmt.where(ResidentRow.id != exclude_id)
        rows = (await self._session.execute(stmt)).all()
        taken = []
        if CAR_PLATE in fields and any(r.car_plate == draft.car_plate for r in rows):
            taken.append(CAR_PLATE)
        if PERMIT_NUMBER in fields and any(r.permit_number == draft.permit_number for r in rows):
            taken.append(PERMIT_NUMBER)
        return taken

    async def _commit_or_duplicate(
        self,
        draft: ResidentDraft,
        fields: Sequence[str] = UNIQUE_FIELDS,
        exclude_id: Optional[str] = None,
    ) -> None:
        """Commit; a unique violation that slipped past the pre-check becomes DuplicateResidentError."""
        try:
            await self._session.commit()
        except IntegrityError as e:
            await self._session.rollback()
            conflicts = await self._find_conflicts(draft, fields=fields, exclude_id=exclude_id)
            raise DuplicateResidentError(conflicts or list(fields)) from e

    async def _insert_one(self, draft: ResidentDraft) -> Resident:
        conflicts = await self._find_conflicts(draft)
        if conflicts:
            raise DuplicateResidentError(conflicts)
        validate_resident_draft(draft)
        now = self._clock()
        row = ResidentRow(
            id=str(uuid.uuid4()),
            full_name=draft.full_name,
            section=draft.section,
            building=draft.building,
            door=draft.door,
            car_plate=draft.car_plate,
            permit_number=draft.permit_number,
            phone_primary=draft.phone_primary,
            phone_secondary=draft.phone_secondary,
            created_at=now,
            updated_at=now,
        )
        self._session.add(row)
        await self._commit_or_duplicate(draft)
        return Resident.from_draft(draft, row.id, created_at=now, updated_at=now)

    async def insert(self, draft: ResidentDraft) -> Resident:
        with _storage_errors():
            return await self._insert_one(draft)

    async def insert_many(self, drafts: Sequence[ResidentDraft]) -> BulkInsertReport:
        report = BulkInsertReport()
        try:
            with _storage_errors():
                for index, draft in enumerate(drafts):
                    try:
                        resident = await self._insert_one(draft)
                    except DuplicateResidentError as e:
                        report.add(RejectedRecord(index=index, draft=draft, reason=e.message, field=e.field))
                        continue
                    except DomainValidationError as e:
                        field = e.fields[0] if e.fields else None
                        report.add(RejectedRecord(index=index, draft=draft, reason=e.message, field=field))
                        continue
                    report.add(InsertedRecord(index=index, resident=resident))
        except StorageUnavailableError:
            # Records committed before the failure stay persisted.
            logger.error(
                "bulk_insert_interrupted",
                extra={
                    "inserted_count": report.inserted_count,
                    "attempted": len(report.outcomes) + 1,
                    "batch_size": len(drafts),
                },
            )
            raise
        return report

    async def get(self, resident_id: str) -> Optional[Resident]:
        with _storage_errors():
            row = await self._session.get(ResidentRow, resident_id)
        if row is None:
            return None
        return _row_to_resident(row)

    async def find_all(self) -> List[Resident]:
        return await self.search(ResidentSearchFilter())

    async def search(self, criteria: ResidentSearchFilter) -> List[Resident]:
        stmt = select(ResidentRow)
        if criteria.section:
            stmt = stmt.where(ResidentRow.section == criteria.section)
        if criteria.location:
            building, door = criteria.location
            stmt = stmt.where(ResidentRow.building == building, ResidentRow.door == door)
        if criteria.car_plate:
            stmt = stmt.where(ResidentRow.car_plate == criteria.car_plate)
        if criteria.permit_number:
            stmt = stmt.where(ResidentRow.permit_number == criteria.permit_number)
        if criteria.full_name:
            pattern = f"%{_escape_like(criteria.full_name)}%"
            stmt = stmt.where(ResidentRow.full_name.ilike(pattern, escape=_LIKE_ESCAPE))
        stmt = stmt.order_by(ResidentRow.updated_at.desc(), ResidentRow.created_at.desc())
        with _storage_errors():
            result = await self._session.execute(stmt)
        return [_row_to_resident(row) for row in result.scalars().all()]

    async def update(self, resident_id: str, changes: dict) -> Resident:
        with _storage_errors():
            row = await self._session.get(ResidentRow, resident_id)
            if row is None:
                raise ResidentNotFoundError(resident_id)
            current = _row_to_resident(row)
            candidate = apply_changes(current.to_draft(), changes)
            changed = changed_unique_fields(current, candidate)
            conflicts = await self._find_conflicts(candidate, fields=changed, exclude_id=resident_id)
            if conflicts:
                raise DuplicateResidentError(conflicts)
            validate_resident_draft(candidate)
            for attribute, value in changes.items():
                setattr(row, attribute, value)
            row.updated_at = self._clock()
            await self._commit_or_duplicate(candidate, fields=changed or UNIQUE_FIELDS, exclude_id=resident_id)
            return _row_to_resident(row)

    async def delete(self, resident_id: str) -> None:
        with _storage_errors():
            await self._session.execute(delete(ResidentRow).where(ResidentRow.id == resident_id))
            await self._session.commit()
