"""Page store implementations."""

from .caching_page_store import CachingPageStore
from .notion_page_store import NotionPageStore

__all__ = ["NotionPageStore", "CachingPageStore"]
