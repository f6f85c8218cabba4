"""Residents API router: list, search, CRUD and bulk sync."""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Query, Request

from resident_directory.api.dependencies import get_resident_service, get_sync_service
from resident_directory.application.resident_service import ResidentService, build_search_filter
from resident_directory.application.sync_service import SyncService
from resident_directory.domain.exceptions import MalformedPayloadError
from resident_directory.domain.schemas.resident import (
    DeleteResponse,
    ResidentCreateRequest,
    ResidentResponse,
    ResidentUpdateRequest,
    SyncResponse,
)

router = APIRouter()


@router.get("", response_model=List[ResidentResponse])
async def list_residents(
    service: Annotated[ResidentService, Depends(get_resident_service)],
):
    """All residents, most recently updated first (initial sync for clients)."""
    return await service.list_residents()


@router.get("/search", response_model=List[ResidentResponse])
async def search_residents(
    service: Annotated[ResidentService, Depends(get_resident_service)],
    section: Optional[str] = None,
    building: Optional[str] = None,
    door: Optional[str] = None,
    door_number: Annotated[Optional[str], Query(alias="doorNumber")] = None,
    car_plate: Annotated[Optional[str], Query(alias="carPlate")] = None,
    permit_number: Annotated[Optional[str], Query(alias="permitNumber")] = None,
    full_name: Annotated[Optional[str], Query(alias="fullName")] = None,
):
    """
    ?section=GH1&building=B&door=12
    ?carPlate=12345A
    ?fullName=john
    building and door only filter together.
    """
    criteria = build_search_filter(
        section=section,
        building=building,
        door=door or door_number,
        car_plate=car_plate,
        permit_number=permit_number,
        full_name=full_name,
    )
    return await service.search_residents(criteria)


@router.post("/sync", response_model=SyncResponse)
async def sync_residents(
    request: Request,
    service: Annotated[SyncService, Depends(get_sync_service)],
):
    """Bulk push from a client. Body is an array of residents or {"residents": [...]}."""
    try:
        raw = await request.json()
    except ValueError as e:
        raise MalformedPayloadError("Sync payload is not valid JSON") from e
    return await service.sync(raw)


@router.post("", response_model=ResidentResponse, status_code=201)
async def create_resident(
    body: ResidentCreateRequest,
    service: Annotated[ResidentService, Depends(get_resident_service)],
):
    return await service.create_resident(body)


@router.get("/{resident_id}", response_model=ResidentResponse)
async def get_resident(
    resident_id: str,
    service: Annotated[ResidentService, Depends(get_resident_service)],
):
    return await service.get_resident(resident_id)


@router.put("/{resident_id}", response_model=ResidentResponse)
@router.patch("/{resident_id}", response_model=ResidentResponse)
async def update_resident(
    resident_id: str,
    body: ResidentUpdateRequest,
    service: Annotated[ResidentService, Depends(get_resident_service)],
):
    """Partial update: only fields present in the body change."""
    return await service.update_resident(resident_id, body)


@router.delete("/{resident_id}", response_model=DeleteResponse)
async def delete_resident(
    resident_id: str,
    service: Annotated[ResidentService, Depends(get_resident_service)],
):
    """Idempotent: deleting an unknown id still succeeds."""
    await service.delete_resident(resident_id)
    return DeleteResponse()
