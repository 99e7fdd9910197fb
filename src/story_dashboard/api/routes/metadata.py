"""Workspace-wide lookups: database metadata and narrative threads."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from ...data_models.views import DatabasesMetadata
from ...services import EntityService
from ...upstream.exceptions import UpstreamError
from ..dependencies import get_entity_service
from ..models.api_models import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["metadata"])


@router.get("/metadata", response_model=DatabasesMetadata)
async def get_databases_metadata(service: EntityService = Depends(get_entity_service)):
    """Database ids per collection and the known element types."""
    return service.get_databases_metadata()


@router.get(
    "/narrative-threads",
    response_model=list[str],
    responses={500: {"model": ErrorResponse}},
)
async def get_narrative_threads(service: EntityService = Depends(get_entity_service)):
    """Every narrative thread used anywhere, sorted."""
    try:
        return await service.list_narrative_threads()
    except UpstreamError as e:
        logger.error(f"Failed to list narrative threads: {e}")
        raise HTTPException(
            status_code=500, detail="Failed to retrieve narrative threads"
        ) from e
