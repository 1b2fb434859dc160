"""FastAPI application for the Smoogle search API."""

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .... import __version__
from ....config import settings, setup_logging
from ....core.domain.exceptions import SmoogleError
from ...common.exception_handler import (
    format_exception_json,
    get_http_status_code,
    log_exception,
)
from .routers import health, search

logger = logging.getLogger(__name__)

# Determine if we're in debug mode (shows full stack traces)
DEBUG_MODE = os.getenv("DEBUG", "false").lower() == "true"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging on startup and close the index client on shutdown."""
    setup_logging(level=settings.log_level, json_format=settings.log_json)
    logger.info("Smoogle API starting up...")
    logger.info("Debug mode: %s", "ENABLED" if DEBUG_MODE else "DISABLED")
    yield
    logger.info("Smoogle API shutting down...")
    if settings.qdrant_url:
        from ....composition.container import get_index

        await get_index().close()


app = FastAPI(
    title="Smoogle API",
    description="Semantic search over a catalog of smart contracts.",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://localhost:5173"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(search.router)


# =============================================================================
# Global Exception Handlers
# =============================================================================


@app.exception_handler(SmoogleError)
async def smoogle_error_handler(request: Request, exc: SmoogleError) -> JSONResponse:
    """Render SmoogleError as structured JSON with a mapped status code."""
    status_code = get_http_status_code(exc)
    log_exception(
        exc,
        log=logger,
        level=logging.WARNING if status_code < 500 else logging.ERROR,
        extra_context={"path": str(request.url.path), "method": request.method},
    )

    return JSONResponse(
        status_code=status_code,
        content=exc.to_dict(include_trace=DEBUG_MODE),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render unhandled exceptions as structured JSON."""
    log_exception(exc, log=logger, extra_context={"path": str(request.url.path), "method": request.method})

    return JSONResponse(
        status_code=get_http_status_code(exc),
        content=format_exception_json(exc, include_trace=DEBUG_MODE),
    )


# Export for uvicorn
__all__ = ["app"]
