"""Composition root wiring adapters to the query controller."""

from __future__ import annotations

import logging
from functools import lru_cache

from ..adapters.outbound.embedding import SentenceTransformerProvider
from ..adapters.outbound.vector_store import QdrantIndexAdapter
from ..config import settings
from ..core.domain.exceptions import MissingConfigurationError
from ..core.services import QueryController, QueryEmbedder, ResultResolver

logger = logging.getLogger(__name__)


@lru_cache
def get_embedding_provider() -> SentenceTransformerProvider:
    logger.info("Initializing SentenceTransformerProvider (composition root)...")
    return SentenceTransformerProvider(
        model_name=settings.embedding_model,
        device=settings.embedding_device,
    )


@lru_cache
def get_embedder() -> QueryEmbedder:
    return QueryEmbedder(get_embedding_provider(), dimension=settings.embedding_dimension)


@lru_cache
def get_index() -> QdrantIndexAdapter:
    if not settings.qdrant_url:
        raise MissingConfigurationError(
            "Qdrant URL not set (set SMOOGLE_QDRANT_URL in .env)",
            context={"setting": "qdrant_url"},
        )
    logger.info("Initializing QdrantIndexAdapter for collection %s...", settings.collection_name)
    return QdrantIndexAdapter(
        url=settings.qdrant_url,
        api_key=settings.qdrant_api_key,
        collection_name=settings.collection_name,
        timeout=settings.request_timeout,
    )


def build_controller(top_k: int | None = None) -> QueryController:
    """Create a controller with its own state around the shared model and index.

    Each presentation session (CLI run, API request) gets a fresh state
    machine; the loaded model is shared process-wide.
    """
    return QueryController(
        embedder=get_embedder(),
        index=get_index(),
        resolver=ResultResolver(),
        top_k=settings.top_k if top_k is None else top_k,
    )
