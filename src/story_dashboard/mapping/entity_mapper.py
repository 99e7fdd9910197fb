"""Map raw upstream pages into typed entities."""

import logging
from typing import Any

from ..data_models.entities import (
    ENTITY_MODELS,
    Character,
    CharacterOverview,
    DashboardModel,
    Element,
    EntityType,
    Puzzle,
    TimelineEvent,
)
from ..data_models.relations import RELATIONS, TITLE_PROPERTIES
from .memory_fields import is_memory_token, parse_memory_fields
from .property_resolver import (
    extract_date_by_name,
    extract_multi_select_by_name,
    extract_number_by_name,
    extract_relation_by_name,
    extract_rich_text_by_name,
    extract_select_by_name,
    extract_title_by_name,
    extract_url_by_name,
)

logger = logging.getLogger(__name__)


def _page_parts(page: Any) -> tuple[str, dict[str, Any]] | None:
    """Return (id, property bag), or None if the page lacks either."""
    if not isinstance(page, dict):
        return None
    page_id = page.get("id")
    properties = page.get("properties")
    if not isinstance(page_id, str) or not page_id or not isinstance(properties, dict):
        return None
    return page_id, properties


def _last_edited(page: dict[str, Any]) -> str | None:
    value = page.get("last_edited_time")
    return value if isinstance(value, str) else None


def _relation_ids(entity_type: EntityType, bag: dict[str, Any]) -> dict[str, list[str]]:
    return {
        spec.field: extract_relation_by_name(bag, spec.property_name)
        for spec in RELATIONS[entity_type]
    }


def _build(model: type[DashboardModel], fields: dict[str, Any]) -> DashboardModel:
    # Absent optional values stay unset so they are omitted on output
    return model(**{key: value for key, value in fields.items() if value is not None})


def map_character(page: Any) -> Character | None:
    parts = _page_parts(page)
    if parts is None:
        return None
    page_id, bag = parts

    return _build(
        Character,
        {
            "entity_type": EntityType.CHARACTER.value,
            "id": page_id,
            "name": extract_title_by_name(bag, TITLE_PROPERTIES[EntityType.CHARACTER]),
            "type": extract_select_by_name(bag, "Type"),
            "tier": extract_select_by_name(bag, "Tier"),
            "logline": extract_rich_text_by_name(bag, "Character Logline"),
            "overview": extract_rich_text_by_name(bag, "Overview & Key Relationships"),
            "emotion": extract_rich_text_by_name(bag, "Emotion towards CEO & others"),
            "primary_action": extract_rich_text_by_name(bag, "Primary Action"),
            "connections": extract_number_by_name(bag, "Connections"),
            "act_focus": extract_select_by_name(bag, "Act Focus"),
            "themes": extract_multi_select_by_name(bag, "Themes"),
            "memory_sets": extract_multi_select_by_name(bag, "Memory Sets"),
            "resolution_paths": extract_multi_select_by_name(bag, "Resolution Paths"),
            "narrative_threads": extract_multi_select_by_name(bag, "Narrative Threads"),
            "last_edited": _last_edited(page),
            **_relation_ids(EntityType.CHARACTER, bag),
        },
    )


def map_character_overview(page: Any) -> CharacterOverview | None:
    """Map a character down to ``{id, name}`` for lists."""
    parts = _page_parts(page)
    if parts is None:
        return None
    page_id, bag = parts
    return CharacterOverview(
        id=page_id,
        name=extract_title_by_name(bag, TITLE_PROPERTIES[EntityType.CHARACTER]),
    )


def map_element(page: Any) -> Element | None:
    parts = _page_parts(page)
    if parts is None:
        return None
    page_id, bag = parts

    basic_type = extract_select_by_name(bag, "Basic Type")
    description = extract_rich_text_by_name(bag, "Description/Text")
    # Directive-looking text on ordinary props is just prose
    properties = parse_memory_fields(description) if is_memory_token(basic_type) else None

    return _build(
        Element,
        {
            "entity_type": EntityType.ELEMENT.value,
            "id": page_id,
            "name": extract_title_by_name(bag, TITLE_PROPERTIES[EntityType.ELEMENT]),
            "basic_type": basic_type,
            "description": description,
            "status": extract_select_by_name(bag, "Status"),
            "first_available": extract_select_by_name(bag, "First Available"),
            "content_link": extract_url_by_name(bag, "Content Link"),
            "production_notes": extract_rich_text_by_name(bag, "Production/Puzzle Notes"),
            "act_focus": extract_select_by_name(bag, "Act Focus"),
            "themes": extract_multi_select_by_name(bag, "Themes"),
            "memory_sets": extract_multi_select_by_name(bag, "Memory Set"),
            "narrative_threads": extract_multi_select_by_name(bag, "Narrative Threads"),
            "last_edited": _last_edited(page),
            "properties": properties,
            **_relation_ids(EntityType.ELEMENT, bag),
        },
    )


def map_puzzle(page: Any) -> Puzzle | None:
    parts = _page_parts(page)
    if parts is None:
        return None
    page_id, bag = parts

    return _build(
        Puzzle,
        {
            "entity_type": EntityType.PUZZLE.value,
            "id": page_id,
            "puzzle": extract_title_by_name(bag, TITLE_PROPERTIES[EntityType.PUZZLE]),
            "description": extract_rich_text_by_name(bag, "Description/Solution"),
            "story_reveals": extract_rich_text_by_name(bag, "Story Reveals"),
            "timing": extract_select_by_name(bag, "Timing"),
            "asset_link": extract_url_by_name(bag, "Asset Link"),
            "act_focus": extract_select_by_name(bag, "Act Focus"),
            "themes": extract_multi_select_by_name(bag, "Themes"),
            "memory_sets": extract_multi_select_by_name(bag, "Memory Sets"),
            "resolution_paths": extract_multi_select_by_name(bag, "Resolution Paths"),
            "narrative_threads": extract_multi_select_by_name(bag, "Narrative Threads"),
            "last_edited": _last_edited(page),
            **_relation_ids(EntityType.PUZZLE, bag),
        },
    )


def map_timeline_event(page: Any) -> TimelineEvent | None:
    parts = _page_parts(page)
    if parts is None:
        return None
    page_id, bag = parts

    return _build(
        TimelineEvent,
        {
            "entity_type": EntityType.TIMELINE_EVENT.value,
            "id": page_id,
            "description": extract_title_by_name(
                bag, TITLE_PROPERTIES[EntityType.TIMELINE_EVENT]
            ),
            "date": extract_date_by_name(bag, "Date"),
            "mem_type": extract_rich_text_by_name(bag, "mem type"),
            "notes": extract_rich_text_by_name(bag, "Notes"),
            "act_focus": extract_select_by_name(bag, "Act Focus"),
            "themes": extract_multi_select_by_name(bag, "Themes"),
            "narrative_threads": extract_multi_select_by_name(bag, "Narrative Threads"),
            "last_edited": _last_edited(page),
            **_relation_ids(EntityType.TIMELINE_EVENT, bag),
        },
    )


MAPPERS = {
    EntityType.CHARACTER: map_character,
    EntityType.ELEMENT: map_element,
    EntityType.PUZZLE: map_puzzle,
    EntityType.TIMELINE_EVENT: map_timeline_event,
}


def map_entity(entity_type: EntityType, page: Any) -> DashboardModel | None:
    """Map a page with the mapper for ``entity_type``."""
    entity = MAPPERS[entity_type](page)
    if entity is None:
        page_id = page.get("id") if isinstance(page, dict) else None
        logger.debug(f"Page {page_id!r} has no usable shape for {entity_type.value}")
    return entity


def minimal_entity(entity_type: EntityType, page_id: str) -> DashboardModel:
    """Stand-in for a page that has an id but nothing else usable."""
    return ENTITY_MODELS[entity_type](
        entity_type=entity_type.value,
        id=page_id,
        **{spec.field: [] for spec in RELATIONS[entity_type]},
    )
