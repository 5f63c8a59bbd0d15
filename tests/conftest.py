# ABOUTME: Shared fixtures for persistence and service tests
# ABOUTME: In-memory async SQLite database manager with tables created

import pytest_asyncio

from location_scout.persistence import DatabaseManager


@pytest_asyncio.fixture
async def temp_db():
    db = DatabaseManager(database_url="sqlite+aiosqlite://")
    await db.create_tables()
    yield db
    await db.close()
