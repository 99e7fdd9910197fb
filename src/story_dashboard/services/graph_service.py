"""Depth-bounded relationship graph around one center entity."""

import asyncio
import logging
from typing import Any

from ..config.graph_config import GraphConfig
from ..data_models.entities import DashboardModel, Edge, EntityType, Graph
from ..data_models.relations import RELATIONS, RelationSpec
from ..mapping.entity_mapper import map_entity, minimal_entity
from ..upstream.exceptions import (
    EntityNotFoundError,
    UpstreamError,
    UpstreamFailureError,
)
from ..upstream.interfaces import Page, PageStore

logger = logging.getLogger(__name__)


def normalize_depth(depth: Any, default: int = 1) -> int:
    """
    Coerce a requested depth into a non-negative integer.

    Anything that is not a non-negative integer (missing, negative,
    non-numeric) falls back to ``default``.
    """
    if isinstance(depth, bool):
        return default
    if isinstance(depth, int):
        return depth if depth >= 0 else default
    if isinstance(depth, str) and depth.strip().isdecimal():
        return int(depth.strip())
    return default


class GraphService:
    """Service building relationship graphs by level-synchronous BFS."""

    def __init__(self, page_store: PageStore, config: GraphConfig | None = None):
        """
        Initialize the graph service.

        Args:
            page_store: Store used for every upstream read
            config: Graph configuration. If None, loads from environment.
        """
        self.page_store = page_store
        self.config = config or GraphConfig()

    def _to_entity(self, entity_type: EntityType, page: Page, page_id: str) -> DashboardModel:
        entity = map_entity(entity_type, page)
        if entity is None:
            logger.warning(f"Page {page_id} has no usable properties; using a bare node")
            return minimal_entity(entity_type, page_id)
        return entity

    async def _fetch_center(self, entity_id: str) -> Page | None:
        try:
            return await asyncio.wait_for(
                self.page_store.get_page(entity_id),
                timeout=self.config.level_timeout_seconds,
            )
        except TimeoutError as e:
            raise UpstreamFailureError(f"Timeout fetching center page {entity_id}", e) from e
        except UpstreamError:
            raise
        except Exception as e:
            raise UpstreamFailureError(
                f"Failed to fetch center page {entity_id}: {e}", e
            ) from e

    async def _fetch_level(self, page_ids: list[str]) -> list[Page]:
        """Fetch one level's ids as concurrent batches joined under one timeout."""
        size = max(1, self.config.batch_size)
        batches = [page_ids[i : i + size] for i in range(0, len(page_ids), size)]
        results = await asyncio.wait_for(
            asyncio.gather(*(self.page_store.get_pages_by_ids(batch) for batch in batches)),
            timeout=self.config.level_timeout_seconds,
        )
        return [page for pages in results for page in pages]

    async def build_graph(
        self, entity_type: EntityType, entity_id: str, depth: Any = None
    ) -> Graph:
        """
        Build the graph of everything reachable from an entity within ``depth`` hops.

        Args:
            entity_type: Kind of the center entity
            entity_id: Upstream page id of the center entity
            depth: Requested number of hops; invalid values use the default

        Returns:
            The graph. If a level's fetch fails or times out the traversal
            stops there and the graph so far is returned with ``error`` set.

        Raises:
            EntityNotFoundError: If the center page does not exist
            UpstreamFailureError: If the center page could not be fetched
        """
        depth = normalize_depth(depth, self.config.default_depth)

        center_page = await self._fetch_center(entity_id)
        if center_page is None:
            raise EntityNotFoundError(entity_id, entity_type.value)
        center = self._to_entity(entity_type, center_page, entity_id)

        nodes: dict[str, DashboardModel] = {center.id: center}
        edges: dict[tuple[str, str, str], Edge] = {}
        frontier = [center]
        error = None

        for level in range(1, depth + 1):
            references: list[tuple[DashboardModel, RelationSpec, str]] = []
            wanted: dict[str, EntityType] = {}
            for node in frontier:
                for spec in RELATIONS[EntityType(node.entity_type)]:
                    for target_id in getattr(node, spec.field):
                        references.append((node, spec, target_id))
                        if target_id not in nodes:
                            wanted.setdefault(target_id, spec.target)

            if not references:
                break

            pages: list[Page] = []
            if wanted:
                try:
                    pages = await self._fetch_level(list(wanted))
                except TimeoutError:
                    error = f"Timeout fetching level {level} of the graph"
                    logger.warning(f"{error} around {entity_id}")
                    break
                except Exception as e:
                    error = f"Failed fetching level {level} of the graph: {e}"
                    logger.warning(f"{error} around {entity_id}")
                    break

            next_frontier = []
            for page in pages:
                page_id = page.get("id") if isinstance(page, dict) else None
                if page_id not in wanted or page_id in nodes:
                    continue
                entity = self._to_entity(wanted[page_id], page, page_id)
                nodes[page_id] = entity
                next_frontier.append(entity)

            # Edges into already-visited nodes are kept; only re-expansion is skipped
            for node, spec, target_id in references:
                if target_id not in nodes:
                    continue
                source, target = (target_id, node.id) if spec.reverse else (node.id, target_id)
                key = (source, target, spec.label)
                if key not in edges:
                    edges[key] = Edge(source=source, target=target, label=spec.label)

            logger.debug(
                f"Graph {entity_id} level {level}: {len(wanted)} requested, "
                f"{len(next_frontier)} new nodes, {len(edges)} edges"
            )
            frontier = next_frontier
            if not frontier:
                break

        graph_fields: dict[str, Any] = {
            "center": center,
            "nodes": list(nodes.values()),
            "edges": list(edges.values()),
        }
        if error:
            graph_fields["error"] = error
        graph = Graph(**graph_fields)
        logger.info(
            f"Built {entity_type.value} graph for {entity_id} at depth {depth}: "
            f"{len(graph.nodes)} nodes, {len(graph.edges)} edges"
        )
        return graph
