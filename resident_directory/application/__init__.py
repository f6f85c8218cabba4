# Application layer: services that orchestrate domain and infrastructure.

from resident_directory.application.exceptions import (
    ApplicationError,
    StorageUnavailableError,
)
from resident_directory.application.resident_repository import (
    BulkInsertReport,
    InsertedRecord,
    RejectedRecord,
    ResidentRepository,
)
from resident_directory.application.resident_service import ResidentService, build_search_filter
from resident_directory.application.sync_service import SyncService

__all__ = [
    "ApplicationError",
    "BulkInsertReport",
    "InsertedRecord",
    "RejectedRecord",
    "ResidentRepository",
    "ResidentService",
    "StorageUnavailableError",
    "SyncService",
    "build_search_filter",
]
