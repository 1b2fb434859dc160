"""Health check endpoints."""

import logging

from fastapi import APIRouter, Response, status

from ..deps import get_vector_store
from ..models import HealthResponse
from ..... import __version__

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        vector_store="not_checked",
    )


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse, "description": "Contract index unreachable"}},
)
async def readiness_check(response: Response) -> HealthResponse:
    """Readiness probe: 200 only while the contract collection answers."""
    try:
        vector_store = get_vector_store()
        stats = await vector_store.collection_stats()
    except Exception as e:
        logger.warning("Readiness check failed: %s", e)
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(
            status="not_ready",
            version=__version__,
            vector_store=f"error: {e}",
        )

    return HealthResponse(
        status="ready",
        version=__version__,
        vector_store=f"connected ({stats['count']} contracts in {stats['name']})",
    )
