"""Ports implemented by outbound adapters."""

from .embedding_port import EmbedFn, EmbeddingProviderPort
from .vector_store_port import SimilarityIndexPort

__all__ = ["EmbedFn", "EmbeddingProviderPort", "SimilarityIndexPort"]
