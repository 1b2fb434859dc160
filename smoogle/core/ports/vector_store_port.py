"""Similarity Index Port Interface."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from ..domain import RawMatch


class SimilarityIndexPort(ABC):
    """Abstract interface for a read-only nearest-neighbor index."""

    @abstractmethod
    async def query(self, vector: Sequence[float], top_k: int = 5) -> tuple[RawMatch, ...]:
        """Return up to ``top_k`` matches in the index's own ranking order."""
        ...

    @abstractmethod
    async def collection_stats(self) -> dict[str, Any]:
        """Get statistics for the backing collection."""
        ...

    async def close(self) -> None:
        """Release network resources held by the client."""
        return None
