"""Pydantic models for API responses not covered by the domain entities."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response."""

    message: str


class CacheClearResponse(BaseModel):
    """Number of cached pages dropped by a cache clear."""

    cleared: int


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str
