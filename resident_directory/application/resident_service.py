"""Resident application service: single-record CRUD and search on top of the repository."""

import logging
from typing import List, Optional

from resident_directory.application.resident_repository import ResidentRepository
from resident_directory.domain.exceptions import ResidentNotFoundError
from resident_directory.domain.models.resident import ResidentSearchFilter
from resident_directory.domain.normalizer import (
    normalize_car_plate,
    normalize_changes,
    normalize_resident,
)
from resident_directory.domain.schemas.resident import (
    ResidentCreateRequest,
    ResidentResponse,
    ResidentUpdateRequest,
)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


def build_search_filter(
    section: Optional[str] = None,
    building: Optional[str] = None,
    door: Optional[str] = None,
    car_plate: Optional[str] = None,
    permit_number: Optional[str] = None,
    full_name: Optional[str] = None,
) -> ResidentSearchFilter:
    """Query-string values to a filter. Blank values are absent; car plates are folded like stored ones."""
    return ResidentSearchFilter(
        section=_clean(section),
        building=_clean(building),
        door=_clean(door),
        car_plate=normalize_car_plate(car_plate) or None,
        permit_number=_clean(permit_number),
        full_name=_clean(full_name),
    )


class ResidentService:
    """
    Application-layer orchestration only. No HTTP, no FastAPI.
    Domain errors from the repository propagate unchanged to the caller.
    """

    def __init__(self, repository: ResidentRepository, logger: logging.Logger) -> None:
        self._repository = repository
        self._logger = logger

    async def list_residents(self) -> List[ResidentResponse]:
        residents = await self._repository.find_all()
        return [ResidentResponse.from_resident(r) for r in residents]

    async def search_residents(self, criteria: ResidentSearchFilter) -> List[ResidentResponse]:
        residents = await self._repository.search(criteria)
        self._logger.info(
            "residents_searched",
            extra={"match_count": len(residents), "unfiltered": criteria.is_empty},
        )
        return [ResidentResponse.from_resident(r) for r in residents]

    async def get_resident(self, resident_id: str) -> ResidentResponse:
        resident = await self._repository.get(resident_id)
        if resident is None:
            raise ResidentNotFoundError(resident_id)
        return ResidentResponse.from_resident(resident)

    async def create_resident(self, request: ResidentCreateRequest) -> ResidentResponse:
        draft = normalize_resident(request.to_raw())
        resident = await self._repository.insert(draft)
        self._logger.info("resident_created", extra={"resident_id": resident.id})
        return ResidentResponse.from_resident(resident)

    async def update_resident(self, resident_id: str, request: ResidentUpdateRequest) -> ResidentResponse:
        changes = normalize_changes(request.to_raw())
        resident = await self._repository.update(resident_id, changes)
        self._logger.info(
            "resident_updated",
            extra={"resident_id": resident_id, "fields": sorted(changes)},
        )
        return ResidentResponse.from_resident(resident)

    async def delete_resident(self, resident_id: str) -> None:
        await self._repository.delete(resident_id)
        self._logger.info("resident_deleted", extra={"resident_id": resident_id})
