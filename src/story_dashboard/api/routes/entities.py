"""Listing, detail and graph routes for each entity collection."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from ...data_models.entities import (
    CharacterDetail,
    CharacterOverview,
    DashboardModel,
    ElementDetail,
    EntityType,
    Graph,
    PuzzleDetail,
    TimelineEventDetail,
)
from ...data_models.views import ElementWithWarnings, PuzzleFlow, PuzzleWithWarnings
from ...services import EntityService, GraphService
from ...upstream.exceptions import EntityNotFoundError, UpstreamError
from ..dependencies import get_entity_service, get_graph_service
from ..models.api_models import ErrorResponse

logger = logging.getLogger(__name__)

ERROR_RESPONSES = {404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


def _add_entity_routes(
    router: APIRouter,
    entity_type: EntityType,
    detail_model: type[DashboardModel],
    label: str,
) -> APIRouter:
    """Register list, detail and graph endpoints for one collection."""

    @router.get(
        "",
        response_model=list[detail_model],
        response_model_exclude_unset=True,
        responses={500: {"model": ErrorResponse}},
    )
    async def list_entities(
        request: Request,
        service: EntityService = Depends(get_entity_service),
    ):
        try:
            return await service.list_entities(entity_type, dict(request.query_params))
        except UpstreamError as e:
            logger.error(f"Failed to list {entity_type.value} entities: {e}")
            raise HTTPException(
                status_code=500, detail=f"Failed to retrieve {entity_type.value} list"
            ) from e

    @router.get(
        "/{entity_id}",
        response_model=detail_model,
        response_model_exclude_unset=True,
        responses=ERROR_RESPONSES,
    )
    async def get_entity(
        entity_id: str,
        service: EntityService = Depends(get_entity_service),
    ):
        try:
            return await service.get_entity(entity_type, entity_id)
        except EntityNotFoundError as e:
            raise HTTPException(status_code=404, detail=f"{label} not found") from e
        except UpstreamError as e:
            logger.error(f"Failed to get {entity_type.value} {entity_id}: {e}")
            raise HTTPException(
                status_code=500, detail=f"Failed to retrieve {label.lower()}"
            ) from e

    @router.get(
        "/{entity_id}/graph",
        response_model=Graph,
        response_model_exclude_unset=True,
        responses=ERROR_RESPONSES,
    )
    async def get_entity_graph(
        entity_id: str,
        depth: str | None = None,
        service: GraphService = Depends(get_graph_service),
    ):
        # depth is taken as a raw string; invalid values fall back to the default
        try:
            return await service.build_graph(entity_type, entity_id, depth)
        except EntityNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e)) from e
        except UpstreamError as e:
            logger.error(f"Failed to build graph for {entity_type.value} {entity_id}: {e}")
            raise HTTPException(
                status_code=500, detail=f"Failed to build {label.lower()} graph"
            ) from e

    return router


# Fixed paths below are registered before the /{entity_id} routes so they
# are not taken as ids

characters = APIRouter(prefix="/characters", tags=["characters"])


@characters.get(
    "/overview",
    response_model=list[CharacterOverview],
    response_model_exclude_unset=True,
    responses={500: {"model": ErrorResponse}},
)
async def get_character_overviews(
    service: EntityService = Depends(get_entity_service),
):
    """Get id and name of every character."""
    try:
        return await service.list_character_overviews()
    except UpstreamError as e:
        logger.error(f"Failed to list character overviews: {e}")
        raise HTTPException(
            status_code=500, detail="Failed to retrieve character overview"
        ) from e


_add_entity_routes(characters, EntityType.CHARACTER, CharacterDetail, "Character")

elements = APIRouter(prefix="/elements", tags=["elements"])


@elements.get(
    "/warnings",
    response_model=list[ElementWithWarnings],
    response_model_exclude_unset=True,
    responses={500: {"model": ErrorResponse}},
)
async def get_elements_with_warnings(
    service: EntityService = Depends(get_entity_service),
):
    """Elements that no puzzle uses or rewards, and memory tokens outside any set."""
    try:
        return await service.list_elements_with_warnings()
    except UpstreamError as e:
        logger.error(f"Failed to list element warnings: {e}")
        raise HTTPException(
            status_code=500, detail="Failed to retrieve elements with warnings"
        ) from e


_add_entity_routes(elements, EntityType.ELEMENT, ElementDetail, "Element")

puzzles = APIRouter(prefix="/puzzles", tags=["puzzles"])


@puzzles.get(
    "/warnings",
    response_model=list[PuzzleWithWarnings],
    response_model_exclude_unset=True,
    responses={500: {"model": ErrorResponse}},
)
async def get_puzzles_with_warnings(
    service: EntityService = Depends(get_entity_service),
):
    """Puzzles missing rewards, inputs or a resolution path."""
    try:
        return await service.list_puzzles_with_warnings()
    except UpstreamError as e:
        logger.error(f"Failed to list puzzle warnings: {e}")
        raise HTTPException(
            status_code=500, detail="Failed to retrieve puzzles with warnings"
        ) from e


@puzzles.get(
    "/{puzzle_id}/flow",
    response_model=PuzzleFlow,
    response_model_exclude_unset=True,
    responses=ERROR_RESPONSES,
)
async def get_puzzle_flow(
    puzzle_id: str,
    service: EntityService = Depends(get_entity_service),
):
    try:
        return await service.get_puzzle_flow(puzzle_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail="Puzzle not found") from e
    except UpstreamError as e:
        logger.error(f"Failed to build flow for puzzle {puzzle_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e)) from e


_add_entity_routes(puzzles, EntityType.PUZZLE, PuzzleDetail, "Puzzle")

timeline = _add_entity_routes(
    APIRouter(prefix="/timeline", tags=["timeline"]),
    EntityType.TIMELINE_EVENT,
    TimelineEventDetail,
    "Timeline event",
)

routers = [characters, elements, puzzles, timeline]
