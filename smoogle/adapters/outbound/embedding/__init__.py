"""Embedding model adapters."""

from .sentence_transformer_adapter import SentenceTransformerProvider

__all__ = ["SentenceTransformerProvider"]
