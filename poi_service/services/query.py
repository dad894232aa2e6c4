"""Read-only POI queries"""
import logging
import time
from dataclasses import dataclass, field
from typing import Optional

from poi_service.errors import is_relation_missing
from poi_service.services import messages
from poi_service.store import PoiStore

logger = logging.getLogger(__name__)


@dataclass
class QueryResult:
    items: list = field(default_factory=list)
    message: str = ""
    collection_missing: bool = False

    @property
    def count(self) -> int:
        return len(self.items)


class PoiQueryService:
    """List-all and search-by-name over the stored collection.

    A missing POI table is reported as an empty result; every other store
    failure propagates.
    """

    def __init__(self, store: PoiStore):
        self._store = store

    async def list_all(self) -> QueryResult:
        try:
            items = await self._store.select_all()
        except Exception as e:
            if is_relation_missing(e):
                logger.warning("POI table does not exist yet; returning empty list")
                return self._missing_collection()
            raise
        logger.info(f"Listed {len(items)} POIs")
        return QueryResult(items=items, message=messages.list_succeeded(len(items)))

    async def search_by_name(self, search_text: Optional[str]) -> QueryResult:
        if not search_text or not search_text.strip():
            logger.info("Blank search text; returning empty result")
            return QueryResult(message=messages.ENTER_SEARCH_TEXT)

        trimmed = search_text.strip()
        start = time.time()
        try:
            items = await self._store.select_where_name_contains(trimmed)
        except Exception as e:
            if is_relation_missing(e):
                logger.warning(f"POI table does not exist yet; search '{trimmed}' returns nothing")
                return self._missing_collection()
            raise
        duration = (time.time() - start) * 1000
        logger.info(f"POI search '{trimmed}' matched {len(items)} rows in {duration:.0f}ms")
        return QueryResult(items=items, message=messages.search_succeeded(trimmed, len(items)))

    @staticmethod
    def _missing_collection() -> QueryResult:
        return QueryResult(message=messages.COLLECTION_MISSING, collection_missing=True)
