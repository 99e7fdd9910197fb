"""Listing and detail reads for the four entity kinds."""

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from ..config.graph_config import GraphConfig
from ..data_models.entities import CharacterOverview, DashboardModel, EntityType, RelationRef
from ..data_models.relations import RELATIONS
from ..data_models.views import (
    DatabasesMetadata,
    ElementWithWarnings,
    FlowItem,
    FlowPuzzle,
    PuzzleFlow,
    PuzzleWithWarnings,
)
from ..mapping.entity_mapper import map_character_overview, map_entity
from ..mapping.relation_enricher import map_entity_with_names
from ..upstream.config import NotionConfig
from ..upstream.exceptions import (
    EntityNotFoundError,
    UpstreamError,
    UpstreamFailureError,
    UpstreamTimeoutError,
)
from ..upstream.interfaces import PageStore
from .warnings import element_warnings, puzzle_warnings

logger = logging.getLogger(__name__)

# Query parameter -> upstream property, per kind
FILTER_PROPERTIES: dict[EntityType, dict[str, str]] = {
    EntityType.CHARACTER: {
        "type": "Type",
        "tier": "Tier",
        "narrativeThreadContains": "Narrative Threads",
    },
    EntityType.ELEMENT: {
        "type": "Basic Type",
        "status": "Status",
        "firstAvailable": "First Available",
        "narrativeThreadContains": "Narrative Threads",
    },
    EntityType.PUZZLE: {
        "timing": "Timing",
        "narrativeThreadContains": "Narrative Threads",
    },
    EntityType.TIMELINE_EVENT: {
        "memType": "mem type",
        "narrativeThreadContains": "Narrative Threads",
    },
}

MEMORY_ELEMENT_TYPES = [
    "Memory Token Video",
    "Memory Token Audio",
    "Memory Token Physical",
    "Corrupted Memory RFID",
    "Memory Fragment",
]

MEMORY_TYPES_GROUP = "memoryTypes"

# Collection name -> kind, as reported by the metadata endpoint
COLLECTIONS = {
    "characters": EntityType.CHARACTER,
    "timeline": EntityType.TIMELINE_EVENT,
    "puzzles": EntityType.PUZZLE,
    "elements": EntityType.ELEMENT,
}

ELEMENT_TYPES = ["Prop", "Set Dressing", "Memory Token Video", "Character Sheet"]

# Puzzle relations that take part in a puzzle's flow
FLOW_FIELDS = {"puzzle_elements", "rewards", "sub_puzzles", "parent_item", "locked_item"}


def _condition(key: str, property_name: str, value: str) -> dict[str, Any]:
    if key == "narrativeThreadContains":
        return {"property": property_name, "multi_select": {"contains": value}}
    if key == "memType":
        return {"property": property_name, "rich_text": {"contains": value}}
    return {"property": property_name, "select": {"equals": value}}


def build_notion_filter(
    query: Mapping[str, str | None], property_map: Mapping[str, str]
) -> dict[str, Any] | None:
    """
    Build an upstream database filter from query parameters.

    Parameters not in ``property_map`` and empty values are ignored.
    One condition is returned bare; several are combined under ``and``.
    """
    conditions = [
        _condition(key, property_map[key], value)
        for key, value in query.items()
        if key in property_map and value
    ]
    if not conditions:
        return None
    return conditions[0] if len(conditions) == 1 else {"and": conditions}


def memory_types_filter() -> dict[str, Any]:
    """Filter matching any memory-token element type."""
    return {
        "or": [
            {"property": "Basic Type", "select": {"equals": basic_type}}
            for basic_type in MEMORY_ELEMENT_TYPES
        ]
    }


def build_listing_filter(
    entity_type: EntityType, query: Mapping[str, str | None]
) -> dict[str, Any] | None:
    """Build the full listing filter for a kind, including element filter groups."""
    query = dict(query)
    filter_group = query.pop("filterGroup", None)
    standard = build_notion_filter(query, FILTER_PROPERTIES[entity_type])

    if entity_type is not EntityType.ELEMENT or filter_group != MEMORY_TYPES_GROUP:
        return standard

    group = memory_types_filter()
    if standard is None:
        return group
    existing = standard["and"] if "and" in standard else [standard]
    return {"and": [*existing, group]}


class EntityService:
    """Service for reading mapped and enriched entities."""

    def __init__(
        self,
        page_store: PageStore,
        notion_config: NotionConfig | None = None,
        graph_config: GraphConfig | None = None,
    ):
        """
        Initialize the entity service.

        Args:
            page_store: Store used for every upstream read
            notion_config: Workspace configuration. If None, loads from environment.
            graph_config: Timeouts for enrichment. If None, loads from environment.
        """
        self.page_store = page_store
        self.notion_config = notion_config or NotionConfig.from_environment()
        self.graph_config = graph_config or GraphConfig()

    async def _enrich(self, entity_type: EntityType, page: Any) -> DashboardModel | None:
        return await map_entity_with_names(
            entity_type,
            page,
            self.page_store,
            timeout=self.graph_config.enrichment_timeout_seconds,
        )

    async def get_entity(self, entity_type: EntityType, entity_id: str) -> DashboardModel:
        """
        Get one entity with its relations resolved to names.

        Raises:
            EntityNotFoundError: If the page does not exist or cannot be mapped
            UpstreamTimeoutError: If the page fetch exceeds the level timeout
        """
        try:
            page = await asyncio.wait_for(
                self.page_store.get_page(entity_id),
                timeout=self.graph_config.level_timeout_seconds,
            )
        except TimeoutError as e:
            raise UpstreamTimeoutError(
                f"Timed out fetching {entity_type.value} {entity_id}", e
            ) from e
        if page is None:
            raise EntityNotFoundError(entity_id, entity_type.value)

        entity = await self._enrich(entity_type, page)
        if entity is None:
            raise EntityNotFoundError(entity_id, entity_type.value)
        return entity

    async def list_entities(
        self, entity_type: EntityType, query: Mapping[str, str | None] | None = None
    ) -> list[DashboardModel]:
        """
        List every entity of a kind matching the query filters.

        Args:
            entity_type: Kind to list
            query: Raw query parameters, e.g. ``{"tier": "Core"}``

        Returns:
            Enriched entities in upstream order; unmappable pages are skipped
        """
        notion_filter = build_listing_filter(entity_type, query or {})
        pages = await self.page_store.query_database(
            self.notion_config.database_id_for(entity_type), notion_filter
        )
        entities = await asyncio.gather(*(self._enrich(entity_type, page) for page in pages))

        skipped = sum(1 for entity in entities if entity is None)
        if skipped:
            logger.warning(f"Skipped {skipped} unmappable {entity_type.value} pages")
        return [entity for entity in entities if entity is not None]

    async def list_character_overviews(self) -> list[CharacterOverview]:
        """List ``{id, name}`` for every character."""
        pages = await self.page_store.query_database(
            self.notion_config.database_id_for(EntityType.CHARACTER)
        )
        overviews = (map_character_overview(page) for page in pages)
        return [overview for overview in overviews if overview is not None]

    async def list_puzzles_with_warnings(self) -> list[PuzzleWithWarnings]:
        """Every puzzle with at least one warning; puzzles whose enrichment failed are skipped."""
        puzzles = await self.list_entities(EntityType.PUZZLE)
        flagged = []
        for puzzle in puzzles:
            if puzzle.error:
                continue
            warnings = puzzle_warnings(puzzle)
            if warnings:
                flagged.append(
                    PuzzleWithWarnings(
                        id=puzzle.id,
                        name=puzzle.puzzle,
                        type="Puzzle",
                        warnings=warnings,
                        owner=puzzle.owner,
                        timing=puzzle.timing or puzzle.act_focus,
                    )
                )
        logger.info(f"Found {len(flagged)} puzzles with warnings")
        return flagged

    async def list_elements_with_warnings(self) -> list[ElementWithWarnings]:
        """Every element with at least one warning; elements whose enrichment failed are skipped."""
        elements = await self.list_entities(EntityType.ELEMENT)
        flagged = []
        for element in elements:
            if element.error:
                continue
            warnings = element_warnings(element)
            if warnings:
                flagged.append(
                    ElementWithWarnings(
                        id=element.id,
                        name=element.name,
                        type="Element",
                        basic_type=element.basic_type,
                        status=element.status,
                        owner=element.owner,
                        warnings=warnings,
                    )
                )
        logger.info(f"Found {len(flagged)} elements with warnings")
        return flagged

    async def list_narrative_threads(self) -> list[str]:
        """Sorted, de-duplicated narrative threads across all four databases."""
        kinds = list(EntityType)
        results = await asyncio.gather(
            *(
                self.page_store.query_database(self.notion_config.database_id_for(kind))
                for kind in kinds
            )
        )

        threads: set[str] = set()
        for kind, pages in zip(kinds, results, strict=True):
            for page in pages:
                entity = map_entity(kind, page)
                if entity is not None:
                    threads.update(entity.narrative_threads)
        return sorted(threads)

    def get_databases_metadata(self) -> DatabasesMetadata:
        """Database ids per collection and the known element types."""
        return DatabasesMetadata(
            databases={
                collection: self.notion_config.database_id_for(entity_type)
                for collection, entity_type in COLLECTIONS.items()
            },
            element_types=list(ELEMENT_TYPES),
        )

    async def get_puzzle_flow(self, puzzle_id: str) -> PuzzleFlow:
        """
        Get a puzzle's inputs, outputs, unlocked puzzles and prerequisites.

        Related pages are fetched once, as one batch. If that fetch fails the
        flow is still returned, named from the puzzle's own relation names.

        Raises:
            EntityNotFoundError: If the puzzle does not exist
            UpstreamFailureError: If the puzzle's own relations could not be resolved
        """
        puzzle = await self.get_entity(EntityType.PUZZLE, puzzle_id)
        if puzzle.error:
            raise UpstreamFailureError(f"Failed to map central puzzle data: {puzzle.error}")

        kinds: dict[str, EntityType] = {}
        for spec in RELATIONS[EntityType.PUZZLE]:
            if spec.field in FLOW_FIELDS:
                for ref in getattr(puzzle, spec.field):
                    if ref.id:
                        kinds.setdefault(ref.id, spec.target)

        related: dict[str, DashboardModel] = {}
        if kinds:
            try:
                pages = await asyncio.wait_for(
                    self.page_store.get_pages_by_ids(list(kinds)),
                    timeout=self.graph_config.level_timeout_seconds,
                )
            except (UpstreamError, TimeoutError) as e:
                logger.warning(f"Puzzle flow {puzzle_id}: related pages unavailable: {e}")
                pages = []
            for page in pages:
                page_id = page.get("id") if isinstance(page, dict) else None
                entity = map_entity(kinds[page_id], page) if page_id in kinds else None
                if entity is not None:
                    related[page_id] = entity

        def element_item(ref: RelationRef) -> FlowItem:
            full = related.get(ref.id)
            return FlowItem(
                id=ref.id,
                name=getattr(full, "name", "") or ref.name or "Unknown Element",
                type="Element",
                basic_type=getattr(full, "basic_type", None) or "Unknown",
            )

        def puzzle_item(ref: RelationRef) -> FlowItem:
            full = related.get(ref.id)
            return FlowItem(
                id=ref.id,
                name=getattr(full, "puzzle", "") or ref.name or "Unknown Puzzle",
                type="Puzzle",
            )

        outputs = [element_item(ref) for ref in puzzle.rewards]
        # A locked item counts as an output only when it resolved to a typed element
        for ref in puzzle.locked_item:
            item = related.get(ref.id)
            if getattr(item, "basic_type", None) and ref.id not in {o.id for o in outputs}:
                outputs.append(element_item(ref))

        return PuzzleFlow(
            central_puzzle=FlowPuzzle(
                id=puzzle.id, name=puzzle.puzzle, type="Puzzle", properties=puzzle
            ),
            input_elements=[element_item(ref) for ref in puzzle.puzzle_elements],
            output_elements=outputs,
            unlocks_puzzles=[puzzle_item(ref) for ref in puzzle.sub_puzzles],
            prerequisite_puzzles=[puzzle_item(ref) for ref in puzzle.parent_item],
        )
