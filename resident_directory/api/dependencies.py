"""FastAPI dependency injection: record store, ResidentService, SyncService."""

import logging
from typing import Annotated, AsyncIterator

from fastapi import Depends

from resident_directory.application.resident_repository import ResidentRepository
from resident_directory.application.resident_service import ResidentService
from resident_directory.application.sync_service import SyncService
from resident_directory.config.settings import get_settings
from resident_directory.infrastructure.database.resident_repository_db import DbResidentRepository
from resident_directory.infrastructure.database.session import get_session_factory
from resident_directory.infrastructure.memory.resident_repository_memory import (
    InMemoryResidentRepository,
)

_memory_repository: InMemoryResidentRepository | None = None


def get_memory_repository() -> InMemoryResidentRepository:
    """Return singleton in-process store (store_backend=memory)."""
    global _memory_repository
    if _memory_repository is None:
        _memory_repository = InMemoryResidentRepository()
    return _memory_repository


async def get_resident_repository() -> AsyncIterator[ResidentRepository]:
    """Yield the configured record store; database sessions live for one request."""
    if get_settings().store_backend == "memory":
        yield get_memory_repository()
        return
    async with get_session_factory()() as session:
        yield DbResidentRepository(session)


def get_resident_service(
    repository: Annotated[ResidentRepository, Depends(get_resident_repository)],
) -> ResidentService:
    return ResidentService(
        repository=repository,
        logger=logging.getLogger("resident_directory.residents"),
    )


def get_sync_service(
    repository: Annotated[ResidentRepository, Depends(get_resident_repository)],
) -> SyncService:
    return SyncService(
        repository=repository,
        logger=logging.getLogger("resident_directory.sync"),
    )

