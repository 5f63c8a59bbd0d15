# ABOUTME: Database manager acting as the record sink and audit key/value sink
# ABOUTME: Appends location rows and upserts one audit snapshot per page key

from __future__ import annotations

from collections.abc import AsyncGenerator, Iterable
from contextlib import asynccontextmanager
from pathlib import Path

from sqlalchemy import delete
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from location_scout.core.models import LocationRecord, PageAuditSnapshot
from location_scout.persistence.models import LocationRow, PageAuditRow, audit_key
from location_scout.utils.logging import get_logger


def _ensure_sqlite_directory(database_url: str) -> None:
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite" or not url.database or url.database == ":memory:":
        return
    Path(url.database).parent.mkdir(parents=True, exist_ok=True)


class DatabaseManager:
    """Manages async database operations for extracted locations and audit snapshots."""

    def __init__(self, database_url: str = "sqlite+aiosqlite:///./data/location_scout.db"):
        """
        Args:
            database_url: Async SQLAlchemy URL; the parent directory of a SQLite file is created if missing
        """
        self.database_url = database_url
        self.logger = get_logger(__name__)
        _ensure_sqlite_directory(database_url)
        self.engine = create_async_engine(database_url, echo=False)
        self.async_session = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_tables(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    async def append_records(self, records: Iterable[LocationRecord]) -> int:
        """Append location records. Returns the number of rows written."""
        rows = [LocationRow.from_record(record) for record in records]
        if not rows:
            return 0
        async with self.transaction() as session:
            session.add_all(rows)
        self.logger.debug("Appended location records", count=len(rows), source_url=rows[0].source_url)
        return len(rows)

    async def put_audit(self, snapshot: PageAuditSnapshot) -> PageAuditRow:
        """Store the audit snapshot for a page, replacing any earlier one."""
        key = audit_key(snapshot.url)
        async with self.transaction() as session:
            row = await session.get(PageAuditRow, key)
            if row:
                row.url = snapshot.url
                row.title = snapshot.title
                row.extracted_locations = list(snapshot.extracted_locations)
                row.timestamp = snapshot.timestamp
            else:
                row = PageAuditRow(
                    key=key,
                    url=snapshot.url,
                    title=snapshot.title,
                    extracted_locations=list(snapshot.extracted_locations),
                    timestamp=snapshot.timestamp,
                )
            session.add(row)
        self.logger.debug("Stored page audit snapshot", key=key, location_count=len(row.extracted_locations))
        return row

    async def get_audit(self, url: str) -> PageAuditSnapshot | None:
        async with self.async_session() as session:
            row = await session.get(PageAuditRow, audit_key(url))
            return row.to_snapshot() if row else None

    async def list_records(self, source_url: str | None = None) -> list[LocationRow]:
        """Stored location rows in insertion order, optionally for a single page."""
        async with self.async_session() as session:
            statement = select(LocationRow).order_by(LocationRow.id)
            if source_url is not None:
                statement = statement.where(LocationRow.source_url == source_url)
            result = await session.exec(statement)
            return list(result.all())

    async def clear(self) -> None:
        """Remove all stored records and audit snapshots."""
        async with self.transaction() as session:
            await session.exec(delete(LocationRow))
            await session.exec(delete(PageAuditRow))

    async def close(self) -> None:
        await self.engine.dispose()

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[AsyncSession, None]:
        """Session committed when the block exits cleanly, rolled back when it raises."""
        session = self.async_session()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
