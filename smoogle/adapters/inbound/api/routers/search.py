"""Search endpoint for semantic contract lookup."""

import logging

from fastapi import APIRouter, Depends

from .....core.domain import QueryPhase
from .....core.services import QueryController
from ..deps import get_controller
from ..models import ContractResult, ErrorResponse, SearchRequest, SearchResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["search"])


@router.post(
    "/search",
    response_model=SearchResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid query"},
        500: {"model": ErrorResponse, "description": "Embedding model failure"},
        503: {"model": ErrorResponse, "description": "Vector index unavailable"},
    },
)
async def search_contracts(
    request: SearchRequest,
    controller: QueryController = Depends(get_controller),
) -> SearchResponse:
    """Find the contracts most similar to a free-text query.

    Failures are raised as SmoogleError and rendered by the app's
    exception handlers with their error code.
    """
    await controller.submit(request.query, top_k=request.top_k)

    state = controller.state
    if state.phase is QueryPhase.FAILED and state.error is not None:
        raise state.error

    return SearchResponse(
        query=state.query,
        results=[ContractResult.from_domain(result) for result in state.results],
    )
