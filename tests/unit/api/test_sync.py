"""Tests for POST /api/residents/sync: payload shapes, partial success, duplicates, malformed bodies."""

import pytest
from httpx import AsyncClient

from resident_directory.api import dependencies
from resident_directory.application.exceptions import StorageUnavailableError
from resident_directory.main import app

SYNC = "/api/residents/sync"


@pytest.fixture
def client(async_client):
    return async_client


@pytest.mark.asyncio
async def test_sync_bare_array(client: AsyncClient, resident_data):
    r = await client.post(
        SYNC,
        json=[resident_data(), resident_data(carPlate="CD 4", permitNumber="M4")],
    )
    assert r.status_code == 200
    data = r.json()
    assert data["insertedCount"] == 2
    assert data["rejectedCount"] == 0
    assert data["received"] == 2
    assert len(data["residents"]) == 2


@pytest.mark.asyncio
async def test_sync_wrapped_object(client: AsyncClient, resident_data):
    r = await client.post(SYNC, json={"residents": [resident_data()]})
    assert r.status_code == 200
    assert r.json()["insertedCount"] == 1


@pytest.mark.asyncio
async def test_sync_partial_success_is_counted_exactly(client: AsyncClient, resident_data):
    r = await client.post("/api/residents", json=resident_data(carPlate="OLD", permitNumber="M1"))
    assert r.status_code == 201

    r = await client.post(
        SYNC,
        json=[
            resident_data(carPlate="AB 123", permitNumber="M1"),
            resident_data(carPlate="ab123", permitNumber="M2"),
        ],
    )
    assert r.status_code == 200
    data = r.json()
    assert data["insertedCount"] == 1
    assert data["rejectedCount"] == 1
    assert data["residents"][0]["carPlate"] == "ab123"


@pytest.mark.asyncio
async def test_sync_all_duplicates_is_success_with_zero(client: AsyncClient, resident_data, memory_repository):
    batch = [resident_data(), resident_data(carPlate="CD 4", permitNumber="M4")]
    first = await client.post(SYNC, json=batch)
    assert first.json()["insertedCount"] == 2

    again = await client.post(SYNC, json=batch)
    assert again.status_code == 200
    assert again.json()["insertedCount"] == 0
    assert again.json()["residents"] == []
    assert len(memory_repository) == 2


@pytest.mark.asyncio
async def test_sync_duplicates_within_batch(client: AsyncClient, resident_data):
    r = await client.post(SYNC, json=[resident_data(), resident_data(carPlate=" ab 123")])
    assert r.status_code == 200
    assert r.json()["insertedCount"] == 1


@pytest.mark.asyncio
async def test_sync_invalid_records_are_counted_not_raised(client: AsyncClient, resident_data):
    r = await client.post(SYNC, json=[{"fullName": "no plate"}, resident_data()])
    assert r.status_code == 200
    assert r.json()["insertedCount"] == 1
    assert r.json()["rejectedCount"] == 1


@pytest.mark.parametrize("payload", [{"items": []}, {"residents": "x"}, "text", 5, [1, 2]])
@pytest.mark.asyncio
async def test_sync_malformed_payload_returns_400(client: AsyncClient, memory_repository, payload):
    r = await client.post(SYNC, json=payload)
    assert r.status_code == 400
    assert "detail" in r.json()
    assert len(memory_repository) == 0


@pytest.mark.asyncio
async def test_sync_invalid_json_returns_400(client: AsyncClient, memory_repository):
    r = await client.post(SYNC, content=b"{not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert len(memory_repository) == 0


@pytest.mark.asyncio
async def test_sync_storage_unavailable_returns_503(client: AsyncClient, resident_data):
    class DownRepository:
        async def insert_many(self, drafts):
            raise StorageUnavailableError("connection refused")

    app.dependency_overrides[dependencies.get_resident_repository] = lambda: DownRepository()
    r = await client.post(SYNC, json=[resident_data()])
    assert r.status_code == 503
    assert r.json()["detail"] == "Resident store unavailable"
