"""Bulk synchronization of client-side resident datasets into the shared store."""

import logging
from typing import Any

from resident_directory.application.resident_repository import (
    BulkInsertReport,
    ResidentRepository,
)
from resident_directory.domain.normalizer import normalize_resident
from resident_directory.domain.schemas.resident import ResidentResponse, SyncResponse
from resident_directory.domain.schemas.sync import parse_sync_payload


class SyncService:
    """
    Merges a pushed batch into the store with unordered insert semantics.

    Duplicates are an ordinary sync outcome: they are counted, never raised.
    Only a malformed payload (MalformedPayloadError) or an unreachable store
    (StorageUnavailableError) fail the call, and a malformed payload fails
    before the store is touched.
    """

    def __init__(self, repository: ResidentRepository, logger: logging.Logger) -> None:
        self._repository = repository
        self._logger = logger

    async def sync(self, raw_payload: Any) -> SyncResponse:
        # Step 1: Shape check
        batch = parse_sync_payload(raw_payload)

        # Step 2: Normalize every candidate; nothing is dropped here
        drafts = [normalize_resident(record) for record in batch.records]

        # Step 3: Unordered insert
        if drafts:
            report = await self._repository.insert_many(drafts)
        else:
            report = BulkInsertReport()

        # Step 4: Count what the store confirmed
        for failure in report.failures:
            self._logger.info(
                "sync_record_rejected",
                extra={"index": failure.index, "field": failure.field, "reason": failure.reason},
            )
        self._logger.info(
            "residents_synced",
            extra={
                "received": len(batch),
                "inserted_count": report.inserted_count,
                "rejected_count": len(report.failures),
                "wrapped": batch.wrapped,
            },
        )

        # Step 5: Respond
        return SyncResponse(
            inserted_count=report.inserted_count,
            rejected_count=len(report.failures),
            received=len(batch),
            residents=[ResidentResponse.from_resident(r) for r in report.inserted],
        )
