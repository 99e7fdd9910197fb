"""Normalization of upstream pages into typed entities."""

from .entity_mapper import (
    map_character,
    map_character_overview,
    map_element,
    map_entity,
    map_puzzle,
    map_timeline_event,
    minimal_entity,
)
from .relation_enricher import (
    map_character_with_names,
    map_element_with_names,
    map_entity_with_names,
    map_puzzle_with_names,
    map_timeline_event_with_names,
)

__all__ = [
    "map_character",
    "map_character_overview",
    "map_element",
    "map_puzzle",
    "map_timeline_event",
    "map_entity",
    "minimal_entity",
    "map_character_with_names",
    "map_element_with_names",
    "map_puzzle_with_names",
    "map_timeline_event_with_names",
    "map_entity_with_names",
]
