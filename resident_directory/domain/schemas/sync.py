"""Sync payload shapes. A push is either a bare JSON array or {"residents": [...]}."""

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple, Union

from pydantic import BaseModel, TypeAdapter, ValidationError

from resident_directory.domain.exceptions import MalformedPayloadError


class SyncEnvelope(BaseModel):
    residents: List[Dict[str, Any]]


SyncPayload = Union[List[Dict[str, Any]], SyncEnvelope]

_sync_payload_adapter: TypeAdapter[SyncPayload] = TypeAdapter(SyncPayload)


@dataclass(frozen=True)
class SyncBatch:
    """Candidate records from one push, whatever shape they arrived in."""

    records: Tuple[Dict[str, Any], ...]
    wrapped: bool = False

    def __len__(self) -> int:
        return len(self.records)


def parse_sync_payload(raw: Any) -> SyncBatch:
    """Accept a list of objects or an object with a residents list. Raises MalformedPayloadError otherwise."""
    try:
        payload = _sync_payload_adapter.validate_python(raw)
    except ValidationError as e:
        raise MalformedPayloadError(
            "Sync payload must be an array of residents or an object with a 'residents' array"
        ) from e
    if isinstance(payload, SyncEnvelope):
        return SyncBatch(records=tuple(payload.residents), wrapped=True)
    return SyncBatch(records=tuple(payload))
