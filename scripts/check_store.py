# scripts/check_store.py
"""Smoke check against the configured database: connect, create schema, sync a sample batch twice."""

import sys
from pathlib import Path

from sqlalchemy import text

# Ensure project root is on the path when running this script directly
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import asyncio
import logging

from resident_directory.application.sync_service import SyncService
from resident_directory.infrastructure.database.resident_repository_db import DbResidentRepository
from resident_directory.infrastructure.database.session import (
    create_schema,
    get_engine,
    get_session_factory,
)

SAMPLE_BATCH = {
    "residents": [
        {
            "fullName": "Smoke Check",
            "section": "S0",
            "building": "B0",
            "door": "0",
            "carPlate": "SMOKE 0",
            "permitNumber": "SMOKE-M0",
            "phonePrimary": "0000000000",
        }
    ]
}


async def check_store():
    engine = get_engine()
    async with engine.begin() as conn:
        result = await conn.execute(text("SELECT 1"))
        print("DB Connected:", result.scalar())

    await create_schema(engine)

    async with get_session_factory()() as session:
        service = SyncService(DbResidentRepository(session), logging.getLogger("check_store"))
        first = await service.sync(SAMPLE_BATCH)
        second = await service.sync(SAMPLE_BATCH)
        print("First sync inserted:", first.inserted_count)
        print("Second sync inserted (expect 0):", second.inserted_count)

    await engine.dispose()


asyncio.run(check_store())
