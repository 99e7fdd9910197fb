"""Cache maintenance routes."""

from fastapi import APIRouter, Depends

from ...upstream.cache import TTLPageCache
from ..dependencies import get_page_cache
from ..models.api_models import CacheClearResponse

router = APIRouter(prefix="/cache", tags=["cache"])


@router.post("/clear", response_model=CacheClearResponse)
async def clear_cache(cache: TTLPageCache = Depends(get_page_cache)):
    """Drop every cached page."""
    return CacheClearResponse(cleared=cache.clear())
