"""Services layer for the story dashboard."""

from .entity_service import EntityService
from .graph_service import GraphService

__all__ = ["EntityService", "GraphService"]
