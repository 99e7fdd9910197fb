"""Configuration for relationship-graph traversal and enrichment."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class GraphConfig(BaseSettings):
    """
    Configuration for the graph and enrichment services.

    Values can be overridden with ``GRAPH_``-prefixed environment variables,
    e.g. ``GRAPH_LEVEL_TIMEOUT_SECONDS=30``.
    """

    model_config = SettingsConfigDict(env_prefix="GRAPH_")

    # Traversal
    default_depth: int = 1
    level_timeout_seconds: float = 15.0  # Join timeout for one level's fetches
    batch_size: int = 25  # Ids per get_pages_by_ids call within a level

    # Enrichment (relation ids -> {id, name})
    enrichment_timeout_seconds: float = 10.0
