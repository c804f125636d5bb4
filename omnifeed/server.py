"""
Omnivore RSS API Server

FastAPI application providing endpoints for:
- Readiness
- Saved articles as RSS (server token or caller token)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from . import __version__
from .config import config, state, init_state
from .exceptions import OmnivoreError
from .routes import feed_router, misc_router
from .schemas import ErrorResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Resolve configuration once at startup."""
    # Startup - skip if already initialized (e.g., by tests)
    if state.mode is None:
        logging.basicConfig(level=config.LOG_LEVEL.upper())
        init_state(config)

    yield


app = FastAPI(
    title="Omnivore RSS",
    version=__version__,
    lifespan=lifespan
)


@app.exception_handler(OmnivoreError)
async def omnivore_error_handler(request: Request, exc: OmnivoreError) -> JSONResponse:
    """Upstream failures become a generic 500; details stay in the logs."""
    logger.error(f"{request.method} {request.url.path} failed: {type(exc).__name__}: {exc}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(detail="Failed to get articles from Omnivore.").model_dump()
    )


# Include routers
app.include_router(misc_router)
app.include_router(feed_router)
