"""Tests for the in-memory record store: dual uniqueness, unordered bulk insert, search, update, delete."""

import pytest

from resident_directory.application.resident_repository import InsertedRecord, RejectedRecord
from resident_directory.domain.exceptions import (
    DomainValidationError,
    DuplicateResidentError,
    ResidentNotFoundError,
)
from resident_directory.domain.models.resident import ResidentSearchFilter
from resident_directory.domain.normalizer import normalize_changes, normalize_resident


@pytest.fixture
def draft(resident_data):
    def _make(**overrides):
        return normalize_resident(resident_data(**overrides))

    return _make


@pytest.mark.asyncio
async def test_insert_assigns_id_and_timestamps(memory_repository, draft):
    resident = await memory_repository.insert(draft())
    assert resident.id
    assert resident.created_at is not None
    assert resident.created_at == resident.updated_at
    stored = await memory_repository.find_all()
    assert stored == [resident]
    assert stored[0].to_draft() == draft()


@pytest.mark.asyncio
async def test_duplicate_car_plate_rejected(memory_repository, draft):
    await memory_repository.insert(draft())
    with pytest.raises(DuplicateResidentError) as exc_info:
        await memory_repository.insert(draft(carPlate=" ab 123", permitNumber="M2"))
    assert exc_info.value.field == "carPlate"
    assert len(memory_repository) == 1


@pytest.mark.asyncio
async def test_duplicate_permit_number_rejected(memory_repository, draft):
    await memory_repository.insert(draft())
    with pytest.raises(DuplicateResidentError) as exc_info:
        await memory_repository.insert(draft(carPlate="ZZ 1"))
    assert exc_info.value.field == "permitNumber"
    assert len(memory_repository) == 1


@pytest.mark.asyncio
async def test_collision_on_both_fields_names_car_plate_first(memory_repository, draft):
    await memory_repository.insert(draft())
    with pytest.raises(DuplicateResidentError) as exc_info:
        await memory_repository.insert(draft())
    assert exc_info.value.fields == ("carPlate", "permitNumber")
    assert exc_info.value.field == "carPlate"


@pytest.mark.asyncio
async def test_duplicate_checked_before_validation(memory_repository, draft):
    await memory_repository.insert(draft())
    with pytest.raises(DuplicateResidentError):
        await memory_repository.insert(draft(carPlate="new", phonePrimary=""))


@pytest.mark.asyncio
async def test_insert_rejects_empty_required_field(memory_repository, draft):
    with pytest.raises(DomainValidationError):
        await memory_repository.insert(draft(fullName="  "))
    assert len(memory_repository) == 0


@pytest.mark.asyncio
async def test_insert_many_is_unordered(memory_repository, draft):
    await memory_repository.insert(draft(carPlate="EXISTING", permitNumber="M1"))
    batch = [
        draft(carPlate="P1", permitNumber="M1"),  # permit taken by existing record
        draft(carPlate="P2", permitNumber="M2"),
        draft(carPlate="p2", permitNumber="M3"),  # plate taken by previous batch item
        draft(carPlate="P4", permitNumber=""),  # invalid
        draft(carPlate="P5", permitNumber="M5"),
    ]
    report = await memory_repository.insert_many(batch)

    assert report.inserted_count == 2
    assert [r.car_plate for r in report.inserted] == ["p2", "p5"]
    assert [(f.index, f.field) for f in report.failures] == [
        (0, "permitNumber"),
        (2, "carPlate"),
        (3, "permitNumber"),
    ]
    assert isinstance(report.outcomes[1], InsertedRecord)
    assert isinstance(report.outcomes[0], RejectedRecord)
    assert len(memory_repository) == 3


@pytest.mark.asyncio
async def test_insert_many_all_duplicates(memory_repository, draft):
    await memory_repository.insert(draft())
    report = await memory_repository.insert_many([draft(), draft(permitNumber="M9")])
    assert report.inserted_count == 0
    assert len(report.failures) == 2
    assert len(memory_repository) == 1


@pytest.mark.asyncio
async def test_find_all_newest_first(memory_repository, draft):
    first = await memory_repository.insert(draft(carPlate="P1", permitNumber="M1"))
    second = await memory_repository.insert(draft(carPlate="P2", permitNumber="M2"))
    assert [r.id for r in await memory_repository.find_all()] == [second.id, first.id]

    await memory_repository.update(first.id, normalize_changes({"phonePrimary": "0699"}))
    assert [r.id for r in await memory_repository.find_all()] == [first.id, second.id]


@pytest.mark.asyncio
async def test_search_filters(memory_repository, draft):
    jane = await memory_repository.insert(draft())
    john = await memory_repository.insert(
        draft(fullName="John Smith", section="GH2", building="C", door="1", carPlate="CD 1", permitNumber="M2")
    )

    async def ids(**criteria):
        return [r.id for r in await memory_repository.search(ResidentSearchFilter(**criteria))]

    assert set(await ids()) == {jane.id, john.id}
    assert await ids(section="GH2") == [john.id]
    assert await ids(building="B", door="12") == [jane.id]
    assert set(await ids(building="B")) == {jane.id, john.id}
    assert await ids(car_plate="cd 1") == [john.id]
    assert await ids(permit_number="M1") == [jane.id]
    assert await ids(full_name="SMI") == [john.id]
    assert await ids(section="GH1", full_name="smith") == []


@pytest.mark.asyncio
async def test_update_applies_partial_changes(memory_repository, draft):
    resident = await memory_repository.insert(draft(phoneSecondary="0700"))
    updated = await memory_repository.update(
        resident.id, normalize_changes({"door": " 14 ", "phoneSecondary": None})
    )
    assert updated.id == resident.id
    assert updated.door == "14"
    assert updated.phone_secondary is None
    assert updated.full_name == resident.full_name
    assert updated.created_at == resident.created_at
    assert updated.updated_at > resident.updated_at


@pytest.mark.asyncio
async def test_update_to_taken_car_plate_fails(memory_repository, draft):
    await memory_repository.insert(draft(carPlate="P1", permitNumber="M1"))
    other = await memory_repository.insert(draft(carPlate="P2", permitNumber="M2"))
    with pytest.raises(DuplicateResidentError) as exc_info:
        await memory_repository.update(other.id, normalize_changes({"carPlate": "p1"}))
    assert exc_info.value.field == "carPlate"
    assert (await memory_repository.get(other.id)).car_plate == "p2"


@pytest.mark.asyncio
async def test_update_to_own_car_plate_succeeds(memory_repository, draft):
    resident = await memory_repository.insert(draft())
    updated = await memory_repository.update(
        resident.id, normalize_changes({"carPlate": "AB 123", "permitNumber": "M1"})
    )
    assert updated.car_plate == "ab 123"


@pytest.mark.asyncio
async def test_update_releases_old_unique_values(memory_repository, draft):
    resident = await memory_repository.insert(draft(carPlate="P1", permitNumber="M1"))
    await memory_repository.update(resident.id, normalize_changes({"carPlate": "P9"}))
    reused = await memory_repository.insert(draft(carPlate="P1", permitNumber="M2"))
    assert reused.car_plate == "p1"


@pytest.mark.asyncio
async def test_update_rejects_emptying_required_field(memory_repository, draft):
    resident = await memory_repository.insert(draft())
    with pytest.raises(DomainValidationError):
        await memory_repository.update(resident.id, normalize_changes({"section": ""}))


@pytest.mark.asyncio
async def test_update_unknown_id(memory_repository):
    with pytest.raises(ResidentNotFoundError):
        await memory_repository.update("missing", {})


@pytest.mark.asyncio
async def test_delete_is_idempotent_and_frees_unique_values(memory_repository, draft):
    resident = await memory_repository.insert(draft())
    await memory_repository.delete(resident.id)
    await memory_repository.delete(resident.id)
    await memory_repository.delete("never-existed")
    assert await memory_repository.get(resident.id) is None
    await memory_repository.insert(draft())
    assert len(memory_repository) == 1
