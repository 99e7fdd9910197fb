"""Read-through caching decorator for any page store."""

import logging
from typing import Any

from ..cache import TTLPageCache
from ..interfaces.page_store_interface import Page, PageStore

logger = logging.getLogger(__name__)


class CachingPageStore(PageStore):
    """Serve pages from an advisory cache, falling back to the wrapped store."""

    def __init__(self, store: PageStore, cache: TTLPageCache):
        self.store = store
        self.cache = cache

    async def get_page(self, page_id: str) -> Page | None:
        cached = self.cache.get(page_id)
        if cached is not None:
            logger.debug(f"[CACHE HIT] page {page_id}")
            return cached
        logger.debug(f"[CACHE MISS] page {page_id}")
        page = await self.store.get_page(page_id)
        if page is None:
            return None
        return self.cache.add(page_id, page)

    async def get_pages_by_ids(self, page_ids: list[str]) -> list[Page]:
        found: dict[str, Page] = {}
        misses: list[str] = []
        for page_id in dict.fromkeys(pid for pid in page_ids if pid):
            cached = self.cache.get(page_id)
            if cached is not None:
                found[page_id] = cached
            else:
                misses.append(page_id)

        logger.debug(f"[CACHE] batch of {len(found) + len(misses)}: {len(misses)} misses")
        if misses:
            for page in await self.store.get_pages_by_ids(misses):
                page_id = page.get("id")
                if page_id:
                    found[page_id] = self.cache.add(page_id, page)

        return [found[pid] for pid in dict.fromkeys(page_ids) if pid in found]

    async def query_database(
        self, database_id: str, filter: dict[str, Any] | None = None
    ) -> list[Page]:
        pages = await self.store.query_database(database_id, filter)
        for page in pages:
            if page.get("id"):
                self.cache.add(page["id"], page)
        return pages
