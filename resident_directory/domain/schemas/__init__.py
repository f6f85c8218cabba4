"""Domain schemas. Request/response and validation."""

from resident_directory.domain.schemas.resident import (
    DeleteResponse,
    ResidentCreateRequest,
    ResidentResponse,
    ResidentUpdateRequest,
    SyncResponse,
)
from resident_directory.domain.schemas.sync import SyncBatch, parse_sync_payload

__all__ = [
    "DeleteResponse",
    "ResidentCreateRequest",
    "ResidentResponse",
    "ResidentUpdateRequest",
    "SyncBatch",
    "SyncResponse",
    "parse_sync_payload",
]
