"""Advisory in-memory page cache with per-entry expiry."""

import logging
import time
from collections.abc import Callable

from .interfaces.page_store_interface import Page

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300


class TTLPageCache:
    """
    Page cache keyed by page id.

    Entries are never mutated once written: ``add`` only inserts when no live
    entry exists. The cache is advisory, so an empty cache only costs latency.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[float, Page]] = {}

    def get(self, page_id: str) -> Page | None:
        """Return the live entry for ``page_id``, or None."""
        entry = self._entries.get(page_id)
        if entry is None:
            return None
        expires_at, page = entry
        if expires_at <= self._clock():
            # Only drop the entry we looked at; a fresh one may have replaced it
            if self._entries.get(page_id) is entry:
                del self._entries[page_id]
            return None
        return page

    def add(self, page_id: str, page: Page) -> Page:
        """
        Insert ``page`` unless a live entry already exists.

        Returns:
            The page now held in the cache for ``page_id``
        """
        existing = self.get(page_id)
        if existing is not None:
            return existing
        self._entries[page_id] = (self._clock() + self.ttl_seconds, page)
        return page

    def clear(self) -> int:
        """Drop every entry and return how many were held."""
        count = len(self._entries)
        self._entries.clear()
        logger.info(f"Cleared {count} cached pages")
        return count

    def __len__(self) -> int:
        now = self._clock()
        return sum(1 for expires_at, _ in self._entries.values() if expires_at > now)
