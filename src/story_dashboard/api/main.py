"""FastAPI application for the story dashboard."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .models.api_models import HealthResponse
from .routes import cache, entities, metadata

logger = logging.getLogger(__name__)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as ``{"error": detail}``."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


async def unhandled_exception_handler(request: Request, exc: Exception):
    """Log unexpected failures and return a generic 500."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "Something went wrong!"})


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Story Dashboard API",
        description="Read-only API over the game-design workspace",
        version="0.1.0",
    )

    # Configure CORS for local development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000"],  # React dev server
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Include routers
    for router in entities.routers:
        app.include_router(router, prefix="/api")
    app.include_router(cache.router, prefix="/api")
    app.include_router(metadata.router, prefix="/api")

    @app.get("/", response_model=HealthResponse)
    async def root():
        """Health check endpoint."""
        return HealthResponse(message="Story Dashboard API is running")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("story_dashboard.api.main:app", host="0.0.0.0", port=8000, reload=True)
