"""Shared fixtures: deterministic clock and an in-memory record store."""

from datetime import datetime, timedelta, timezone

import pytest

from resident_directory.infrastructure.memory.resident_repository_memory import (
    InMemoryResidentRepository,
)


class TickingClock:
    """Returns a strictly increasing UTC time on every call."""

    def __init__(self, start: datetime | None = None, step: timedelta = timedelta(seconds=1)):
        self._now = start or datetime(2026, 1, 1, tzinfo=timezone.utc)
        self._step = step

    def __call__(self) -> datetime:
        self._now += self._step
        return self._now


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def memory_repository(clock):
    return InMemoryResidentRepository(clock=clock)


@pytest.fixture
def resident_data():
    """Factory for a complete wire-format resident; overrides replace fields."""

    def _make(**overrides):
        data = {
            "fullName": "Jane Doe",
            "section": "GH1",
            "building": "B",
            "door": "12",
            "carPlate": "AB 123",
            "permitNumber": "M1",
            "phonePrimary": "0600000001",
        }
        data.update(overrides)
        return data

    return _make
