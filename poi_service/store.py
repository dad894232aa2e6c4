"""
POI persistence collaborator

The ingestion pipeline and query service only rely on the four primitives of
``PoiStore``. Store failures are raised unmodified; callers classify them.
"""
import logging
import time
import uuid
from decimal import Decimal
from typing import Protocol, Sequence, runtime_checkable

from sqlalchemy import delete, insert, select

from poi_service.database import Database
from poi_service.errors import error_type_name
from poi_service.models import Poi
from poi_service.schemas.poi import CandidateRecord
from poi_service.utils.metrics import record_db_error, record_db_query

logger = logging.getLogger(__name__)


@runtime_checkable
class PoiStore(Protocol):
    """Storage primitives required by the POI pipeline"""

    async def delete_all(self) -> int:
        ...

    async def insert_many(self, records: Sequence[CandidateRecord]) -> int:
        ...

    async def select_all(self) -> list:
        ...

    async def select_where_name_contains(self, text: str) -> list:
        ...


class SqlAlchemyPoiStore:
    """``PoiStore`` backed by PostgreSQL through an async SQLAlchemy engine.

    Every primitive runs in its own session and commits on its own, so a
    replace is a sequence of independent statements.
    """

    def __init__(self, database: Database):
        self._database = database

    async def delete_all(self) -> int:
        async def run(session):
            result = await session.execute(delete(Poi))
            await session.commit()
            return result.rowcount
        return await self._timed("delete_all", run)

    async def insert_many(self, records: Sequence[CandidateRecord]) -> int:
        rows = [
            {
                "id": uuid.UUID(record.id),
                "title": record.title,
                "latitude": Decimal(str(record.latitude)),
                "longitude": Decimal(str(record.longitude)),
            }
            for record in records
        ]

        async def run(session):
            await session.execute(insert(Poi), rows)
            await session.commit()
            # executemany does not report a reliable rowcount
            return len(rows)
        return await self._timed("insert_many", run)

    async def select_all(self) -> list:
        async def run(session):
            result = await session.execute(select(Poi).order_by(Poi.created_at, Poi.title))
            return list(result.scalars().all())
        return await self._timed("select_all", run)

    async def select_where_name_contains(self, text: str) -> list:
        async def run(session):
            query = (
                select(Poi)
                .where(Poi.title.contains(text, autoescape=True))
                .order_by(Poi.title)
            )
            result = await session.execute(query)
            return list(result.scalars().all())
        return await self._timed("select_where_name_contains", run)

    async def _timed(self, operation: str, run):
        start = time.time()
        try:
            async with self._database.session() as session:
                result = await run(session)
        except Exception as e:
            record_db_error(operation, error_type_name(e))
            raise
        duration = time.time() - start
        record_db_query(operation, duration)
        logger.debug(f"Store {operation} finished in {duration * 1000:.1f}ms")
        return result
