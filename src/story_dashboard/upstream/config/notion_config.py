"""Upstream workspace configuration management."""

import os
from dataclasses import dataclass, field

from ...data_models.entities import EntityType
from ..exceptions.upstream_exceptions import ConfigurationError

DEFAULT_DATABASE_IDS = {
    EntityType.CHARACTER: "18c2f33d583f8060a6abde32ff06bca2",
    EntityType.TIMELINE_EVENT: "1b52f33d583f80deae5ad20020c120dd",
    EntityType.PUZZLE: "1b62f33d583f80cc87cfd7d6c4b0b265",
    EntityType.ELEMENT: "18c2f33d583f802091bcd84c7dd94306",
}


@dataclass
class NotionConfig:
    """Notion workspace configuration."""

    api_key: str | None = None
    database_ids: dict[EntityType, str] = field(
        default_factory=lambda: dict(DEFAULT_DATABASE_IDS)
    )
    timeout: int = 30
    max_concurrency: int = 3
    cache_ttl: int = 300

    @classmethod
    def from_environment(cls) -> "NotionConfig":
        """Create configuration from environment variables."""
        return cls(
            api_key=os.getenv("NOTION_API_KEY"),
            database_ids={
                EntityType.CHARACTER: os.getenv(
                    "NOTION_CHARACTERS_DB", DEFAULT_DATABASE_IDS[EntityType.CHARACTER]
                ),
                EntityType.TIMELINE_EVENT: os.getenv(
                    "NOTION_TIMELINE_DB",
                    DEFAULT_DATABASE_IDS[EntityType.TIMELINE_EVENT],
                ),
                EntityType.PUZZLE: os.getenv(
                    "NOTION_PUZZLES_DB", DEFAULT_DATABASE_IDS[EntityType.PUZZLE]
                ),
                EntityType.ELEMENT: os.getenv(
                    "NOTION_ELEMENTS_DB", DEFAULT_DATABASE_IDS[EntityType.ELEMENT]
                ),
            },
            timeout=int(os.getenv("NOTION_TIMEOUT", "30")),
            max_concurrency=int(os.getenv("NOTION_MAX_CONCURRENCY", "3")),
            cache_ttl=int(os.getenv("NOTION_CACHE_TTL", "300")),
        )

    def validate(self) -> None:
        """
        Validate the configuration.

        Raises:
            ConfigurationError: If the configuration cannot reach the workspace
        """
        if not self.api_key:
            raise ConfigurationError("NOTION_API_KEY environment variable not set")
        if self.max_concurrency < 1:
            raise ConfigurationError(
                f"max_concurrency must be at least 1, got {self.max_concurrency}"
            )

    def database_id_for(self, entity_type: EntityType) -> str:
        """Get the database id holding pages of the given entity type."""
        try:
            return self.database_ids[entity_type]
        except KeyError as e:
            raise ConfigurationError(
                f"No database configured for {entity_type.value}", e
            ) from e
