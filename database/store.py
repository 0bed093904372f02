# School Fee Tracker - record store adapter (get / set / prefix scan)
import logging
from typing import Any, NamedTuple

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from .models import Base, KVEntry

logger = logging.getLogger(__name__)


class Entry(NamedTuple):
    key: str
    value: Any


class RecordStore:
    """Whole-record reads and writes by key over a single ``kv_store`` table.

    Every call opens its own session and commits on exit. There is no
    transaction spanning more than one call, so read-then-write sequences
    built on top of this class can race.
    """

    def __init__(self, database_url: str):
        self.database_url = database_url
        self.engine = create_async_engine(database_url, echo=False)
        self.session = async_sessionmaker(self.engine, class_=AsyncSession, expire_on_commit=False)

    async def init(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Record store ready at %s", self.database_url)

    async def close(self) -> None:
        await self.engine.dispose()

    async def get(self, key: str) -> Any | None:
        async with self.session() as session:
            entry = await session.get(KVEntry, key)
            return entry.value if entry else None

    async def mget(self, keys: list[str]) -> list[Any | None]:
        """Values for ``keys`` in the same order; missing keys give None."""
        if not keys:
            return []
        async with self.session() as session:
            r = await session.execute(select(KVEntry).where(KVEntry.key.in_(keys)))
            found = {e.key: e.value for e in r.scalars().all()}
        return [found.get(k) for k in keys]

    async def set(self, key: str, value: Any) -> None:
        async with self.session() as session:
            await session.merge(KVEntry(key=key, value=value))
            await session.commit()

    async def delete(self, key: str) -> None:
        async with self.session() as session:
            await session.execute(delete(KVEntry).where(KVEntry.key == key))
            await session.commit()

    async def get_by_prefix(self, prefix: str) -> list[Entry]:
        """All entries whose key starts with ``prefix``, ordered by key."""
        async with self.session() as session:
            r = await session.execute(
                select(KVEntry)
                .where(KVEntry.key.startswith(prefix, autoescape=True))
                .order_by(KVEntry.key)
            )
            return [Entry(e.key, e.value) for e in r.scalars().all()]
