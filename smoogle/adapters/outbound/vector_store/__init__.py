"""Vector index adapters."""

from .qdrant_adapter import QdrantIndexAdapter

__all__ = ["QdrantIndexAdapter"]
