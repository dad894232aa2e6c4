"""
Batch replace engine

Replaces the whole POI collection: one delete-all, then inserts in fixed-size
chunks issued one after another. The first failing statement stops the
replace and is re-raised as-is. Rows committed by earlier chunks stay in the
store; there is no compensating rollback.
"""
import asyncio
import logging
from typing import Sequence

from poi_service.errors import EmptyPoiDataError
from poi_service.schemas.poi import CandidateRecord
from poi_service.store import PoiStore
from poi_service.utils.metrics import record_insert_chunk, record_replace_completed

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 1000


def iter_chunks(records: Sequence[CandidateRecord], size: int):
    for start in range(0, len(records), size):
        yield start, records[start:start + size]


class BatchReplaceEngine:
    """Delete-then-insert replace of the POI collection"""

    def __init__(self, store: PoiStore, batch_size: int = DEFAULT_BATCH_SIZE):
        if batch_size < 1:
            raise ValueError("batch_size must be positive")
        self._store = store
        self._batch_size = batch_size
        # One replace at a time per engine; other processes are not guarded
        self._lock = asyncio.Lock()

    @property
    def batch_size(self) -> int:
        return self._batch_size

    async def replace(self, records: Sequence[CandidateRecord]) -> int:
        """Replace the stored collection with ``records``.

        Returns the number of records handed in, which the store is trusted
        to have written.
        """
        if not records:
            raise EmptyPoiDataError("POI data is empty")

        total = len(records)
        async with self._lock:
            deleted = await self._store.delete_all()
            logger.info(f"Deleted {deleted} existing POIs before replace")

            for start, chunk in iter_chunks(records, self._batch_size):
                try:
                    await self._store.insert_many(chunk)
                except Exception:
                    logger.error(
                        f"Insert failed for rows {start + 1}-{start + len(chunk)} of {total}; "
                        f"{start} rows from earlier chunks remain stored"
                    )
                    raise
                record_insert_chunk()
                logger.debug(f"Inserted chunk {start + 1}-{start + len(chunk)} of {total}")

        record_replace_completed(total)
        logger.info(f"Replaced POI collection with {total} records")
        return total
