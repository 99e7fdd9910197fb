#!/usr/bin/env python3
"""
Print the relationship graph or the detail record of one workspace entity.

Reads the workspace configuration from the environment (NOTION_API_KEY and
the NOTION_*_DB overrides) and prints JSON in the same shape the API serves.
"""

import argparse
import asyncio
import logging
import sys

from story_dashboard.config.graph_config import GraphConfig
from story_dashboard.data_models.entities import EntityType
from story_dashboard.services import EntityService, GraphService
from story_dashboard.upstream.config import NotionConfig
from story_dashboard.upstream.exceptions import EntityNotFoundError, UpstreamError
from story_dashboard.upstream.stores import NotionPageStore

# Set up logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)

KINDS = {
    "character": EntityType.CHARACTER,
    "element": EntityType.ELEMENT,
    "puzzle": EntityType.PUZZLE,
    "timeline": EntityType.TIMELINE_EVENT,
}


async def inspect(args: argparse.Namespace) -> str:
    """Fetch the requested view and return it as JSON."""
    notion_config = NotionConfig.from_environment()
    notion_config.validate()
    graph_config = GraphConfig()
    store = NotionPageStore(notion_config)

    try:
        if args.detail:
            service = EntityService(store, notion_config, graph_config)
            result = await service.get_entity(KINDS[args.kind], args.entity_id)
        else:
            service = GraphService(store, graph_config)
            result = await service.build_graph(KINDS[args.kind], args.entity_id, args.depth)
            logger.info(f"Graph has {len(result.nodes)} nodes and {len(result.edges)} edges")
            if result.error:
                logger.warning(f"Graph is partial: {result.error}")
        return result.model_dump_json(by_alias=True, exclude_unset=True, indent=2)
    finally:
        await store.close()


def main():
    parser = argparse.ArgumentParser(
        description="Inspect one entity of the game-design workspace.",
        epilog="""Examples:
  # Two-hop graph around a character
  %(prog)s character 18c2f33d583f8020... --depth 2

  # Enriched detail record for a puzzle
  %(prog)s puzzle 1b62f33d583f80... --detail
""",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("kind", choices=sorted(KINDS), help="Entity kind")
    parser.add_argument("entity_id", help="Upstream page id")
    parser.add_argument(
        "--depth",
        type=str,
        default=None,
        help="Graph depth in hops (default: GRAPH_DEFAULT_DEPTH or 1)",
    )
    parser.add_argument(
        "--detail",
        action="store_true",
        help="Print the enriched detail record instead of the graph",
    )
    args = parser.parse_args()

    try:
        print(asyncio.run(inspect(args)))
    except EntityNotFoundError as e:
        logger.error(str(e))
        sys.exit(1)
    except UpstreamError as e:
        logger.error(f"❌ Upstream error: {e}")
        sys.exit(2)


if __name__ == "__main__":
    main()
