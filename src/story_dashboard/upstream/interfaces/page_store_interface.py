"""Base interface for upstream page store operations."""

from abc import ABC, abstractmethod
from typing import Any

# Raw upstream page: {"id": ..., "properties": {...}, "last_edited_time": ...}
Page = dict[str, Any]


class PageStore(ABC):
    """
    Abstract base class for read access to the upstream page workspace.

    Entities live upstream as pages with loosely-typed property bags. This
    interface is the only seam through which the mapping and graph layers
    reach them, so tests and caches can stand in for the real workspace.
    """

    @abstractmethod
    async def get_page(self, page_id: str) -> Page | None:
        """
        Retrieve a single page by its ID.

        Args:
            page_id: The upstream page identifier

        Returns:
            The raw page if found, None otherwise

        Raises:
            UpstreamError: If the upstream could not be reached
        """
        pass

    @abstractmethod
    async def get_pages_by_ids(self, page_ids: list[str]) -> list[Page]:
        """
        Retrieve several pages in one batch.

        Ids that cannot be resolved are silently dropped; a batch that can be
        partially satisfied never raises.

        Args:
            page_ids: Upstream page identifiers

        Returns:
            The pages that were found, in input order
        """
        pass

    @abstractmethod
    async def query_database(
        self, database_id: str, filter: dict[str, Any] | None = None
    ) -> list[Page]:
        """
        Query every page of a database, optionally filtered.

        Args:
            database_id: The upstream database identifier
            filter: Optional upstream filter object

        Returns:
            List of matching pages
        """
        pass
