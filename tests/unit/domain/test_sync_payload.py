"""Tests for sync payload shapes: bare array, wrapped object, malformed."""

import pytest

from resident_directory.domain.exceptions import MalformedPayloadError
from resident_directory.domain.schemas.sync import parse_sync_payload


def test_bare_array():
    batch = parse_sync_payload([{"carPlate": "a"}, {"carPlate": "b"}])
    assert len(batch) == 2
    assert batch.wrapped is False
    assert batch.records[1] == {"carPlate": "b"}


def test_wrapped_object():
    batch = parse_sync_payload({"residents": [{"carPlate": "a"}], "deviceId": "x"})
    assert len(batch) == 1
    assert batch.wrapped is True


def test_empty_array_is_valid():
    assert len(parse_sync_payload([])) == 0


@pytest.mark.parametrize(
    "raw",
    [
        {},
        {"items": []},
        {"residents": "nope"},
        "residents",
        42,
        None,
        [1, 2],
        [{"carPlate": "a"}, "b"],
    ],
)
def test_malformed_payloads(raw):
    with pytest.raises(MalformedPayloadError):
        parse_sync_payload(raw)
