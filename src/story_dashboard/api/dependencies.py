"""Shared FastAPI dependencies.

Config, cache and page store are process-wide singletons (``lru_cache``);
services are cheap wrappers built per request so tests can override any
of the collaborators with ``app.dependency_overrides``.
"""

import logging
from functools import lru_cache

from fastapi import Depends

from ..config.graph_config import GraphConfig
from ..services import EntityService, GraphService
from ..upstream.cache import TTLPageCache
from ..upstream.config import NotionConfig
from ..upstream.interfaces import PageStore
from ..upstream.stores import CachingPageStore, NotionPageStore

logger = logging.getLogger(__name__)


@lru_cache
def get_notion_config() -> NotionConfig:
    """Get the workspace configuration (cached)."""
    return NotionConfig.from_environment()


@lru_cache
def get_graph_config() -> GraphConfig:
    """Get the graph configuration (cached)."""
    return GraphConfig()


@lru_cache
def get_page_cache() -> TTLPageCache:
    """Get the shared page cache (cached)."""
    return TTLPageCache(ttl_seconds=get_notion_config().cache_ttl)


@lru_cache
def get_page_store() -> PageStore:
    """Get the cached upstream page store (cached)."""
    config = get_notion_config()
    logger.info(f"Creating page store with {config.cache_ttl}s page cache")
    return CachingPageStore(NotionPageStore(config), get_page_cache())


def get_entity_service(
    page_store: PageStore = Depends(get_page_store),
    notion_config: NotionConfig = Depends(get_notion_config),
    graph_config: GraphConfig = Depends(get_graph_config),
) -> EntityService:
    """Get an EntityService bound to the shared store."""
    return EntityService(page_store, notion_config, graph_config)


def get_graph_service(
    page_store: PageStore = Depends(get_page_store),
    graph_config: GraphConfig = Depends(get_graph_config),
) -> GraphService:
    """Get a GraphService bound to the shared store."""
    return GraphService(page_store, graph_config)
