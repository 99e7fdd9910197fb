"""Resolve an entity's relation ids into ``{id, name}`` references."""

import asyncio
import logging
from typing import Any

from ..data_models.entities import (
    DETAIL_MODELS,
    CharacterDetail,
    DashboardModel,
    ElementDetail,
    EntityType,
    PuzzleDetail,
    RelationRef,
    TimelineEventDetail,
)
from ..data_models.relations import RELATIONS, TITLE_PROPERTIES
from ..upstream.interfaces import Page, PageStore
from .entity_mapper import map_entity
from .mentions import parse_mentions
from .property_extractor import extract_page_title

logger = logging.getLogger(__name__)

DEFAULT_ENRICHMENT_TIMEOUT = 10.0


def _to_refs(pages: list[Page], target: EntityType) -> list[RelationRef]:
    return [
        RelationRef(id=page["id"], name=extract_page_title(page, TITLE_PROPERTIES[target]))
        for page in pages
        if isinstance(page, dict) and page.get("id")
    ]


async def map_entity_with_names(
    entity_type: EntityType,
    page: Any,
    page_store: PageStore,
    timeout: float = DEFAULT_ENRICHMENT_TIMEOUT,
) -> DashboardModel | None:
    """
    Map a page and resolve every non-empty relation field to names.

    One batched fetch is issued per non-empty relation field, all of them
    concurrently, under a single timeout. If any of them fails or the
    timeout expires, scalar fields are still returned, the unresolved
    relation fields are left unset, and ``error`` describes the failure.

    Args:
        entity_type: Kind of entity the page holds
        page: Raw upstream page
        page_store: Store used to fetch related pages
        timeout: Seconds allowed for all of this entity's fetches together

    Returns:
        The detail record, or None if the page has no usable shape
    """
    base = map_entity(entity_type, page)
    if base is None:
        return None

    specs = RELATIONS[entity_type]
    fields = base.model_dump(exclude_unset=True, exclude={spec.field for spec in specs})

    resolved: dict[str, list[RelationRef]] = {}
    pending = []
    for spec in specs:
        if getattr(base, spec.field):
            pending.append(spec)
        else:
            resolved[spec.field] = []

    if pending:
        try:
            batches = await asyncio.wait_for(
                asyncio.gather(
                    *(page_store.get_pages_by_ids(getattr(base, spec.field)) for spec in pending)
                ),
                timeout=timeout,
            )
        except TimeoutError:
            fields["error"] = f"Timeout after {timeout:g}s resolving related pages"
            logger.warning(f"Enrichment of {entity_type.value} {base.id} timed out")
        except Exception as e:
            fields["error"] = f"Failed to resolve related pages: {e}"
            logger.warning(f"Enrichment of {entity_type.value} {base.id} failed: {e}")
        else:
            for spec, pages in zip(pending, batches, strict=True):
                resolved[spec.field] = _to_refs(pages, spec.target)

    # Text mentions only stand in when there is no structured relation at all
    if entity_type == EntityType.TIMELINE_EVENT and not base.characters_involved:
        mentions = parse_mentions(base.description, base.notes)
        if mentions:
            logger.debug(f"Event {base.id}: using {len(mentions)} @mentions")
            resolved["characters_involved"] = mentions

    return DETAIL_MODELS[entity_type](**fields, **resolved)


async def map_character_with_names(
    page: Any, page_store: PageStore, timeout: float = DEFAULT_ENRICHMENT_TIMEOUT
) -> CharacterDetail | None:
    return await map_entity_with_names(EntityType.CHARACTER, page, page_store, timeout)


async def map_element_with_names(
    page: Any, page_store: PageStore, timeout: float = DEFAULT_ENRICHMENT_TIMEOUT
) -> ElementDetail | None:
    return await map_entity_with_names(EntityType.ELEMENT, page, page_store, timeout)


async def map_puzzle_with_names(
    page: Any, page_store: PageStore, timeout: float = DEFAULT_ENRICHMENT_TIMEOUT
) -> PuzzleDetail | None:
    return await map_entity_with_names(EntityType.PUZZLE, page, page_store, timeout)


async def map_timeline_event_with_names(
    page: Any, page_store: PageStore, timeout: float = DEFAULT_ENRICHMENT_TIMEOUT
) -> TimelineEventDetail | None:
    return await map_entity_with_names(
        EntityType.TIMELINE_EVENT, page, page_store, timeout
    )
