"""Read-only Qdrant client for top-K contract similarity search.

The collection is populated out of band; this adapter never writes to it.
Each stored point carries the contract metadata as its payload.
"""

import logging
import math
from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from qdrant_client import AsyncQdrantClient

from ....core.domain import RawMatch
from ....core.domain.exceptions import IndexConnectionError, IndexQueryError
from ....core.domain.utils import validate_top_k
from ....core.ports.vector_store_port import SimilarityIndexPort

logger = logging.getLogger(__name__)

# Allowed drift of the query vector's L2 norm from 1.0
UNIT_NORM_TOLERANCE = 1e-4


class QdrantIndexAdapter(SimilarityIndexPort):
    """Qdrant-backed similarity index for the smart-contract catalog."""

    def __init__(
        self,
        url: str,
        api_key: str = "",
        collection_name: str = "contracts",
        timeout: int = 10,
    ) -> None:
        """Initialize the adapter without connecting.

        Args:
            url: Qdrant cluster URL.
            api_key: Qdrant API key (empty for unauthenticated instances).
            collection_name: Collection holding the contract vectors.
            timeout: Request timeout in seconds.
        """
        self.url = url
        self.api_key = api_key
        self.collection_name = collection_name
        self.timeout = timeout
        self._client: AsyncQdrantClient | None = None

    def _get_client(self) -> "AsyncQdrantClient":
        """Get or create the async Qdrant client."""
        if self._client is None:
            try:
                from qdrant_client import AsyncQdrantClient

                self._client = AsyncQdrantClient(
                    url=self.url,
                    api_key=self.api_key or None,
                    timeout=self.timeout,
                )
                logger.info("Connected to Qdrant at: %s", self.url)
            except Exception as e:
                raise IndexConnectionError(
                    f"Failed to create Qdrant client for {self.url}",
                    cause=e,
                    context={"url": self.url},
                ) from e

        return self._client

    async def query(self, vector: Sequence[float], top_k: int = 5) -> tuple[RawMatch, ...]:
        """Request the ``top_k`` nearest contracts to a unit-norm vector.

        Metadata is requested, stored vectors are not.

        Args:
            vector: Unit-norm query embedding.
            top_k: Maximum number of matches.

        Returns:
            Matches in the service's ranking order (descending similarity).

        Raises:
            ValueError: If the vector is empty or not unit-norm.
            InvalidTopKError: If top_k is not a positive integer.
            IndexQueryError: On network, auth or response-format failures.
        """
        validate_top_k(top_k)
        values = [float(v) for v in vector]
        if not values:
            raise ValueError("Query vector is empty")
        norm = math.sqrt(sum(v * v for v in values))
        if abs(norm - 1.0) > UNIT_NORM_TOLERANCE:
            raise ValueError(f"Query vector must be unit-norm, got norm {norm:.6f}")

        client = self._get_client()
        try:
            response = await client.query_points(
                collection_name=self.collection_name,
                query=values,
                limit=top_k,
                with_payload=True,
                with_vectors=False,
            )
        except Exception as e:
            raise IndexQueryError(
                "Similarity query failed",
                cause=e,
                context={"collection": self.collection_name, "top_k": top_k},
            ) from e

        matches = self._parse_points(response, top_k)
        logger.debug("Qdrant returned %d matches from %s", len(matches), self.collection_name)
        return matches

    def _parse_points(self, response: Any, top_k: int) -> tuple[RawMatch, ...]:
        """Convert a query response to RawMatch objects, all or nothing."""
        points = response.points if hasattr(response, "points") else response
        if not isinstance(points, Iterable) or isinstance(points, str | bytes | Mapping):
            raise IndexQueryError(
                "Malformed response from Qdrant: no points",
                context={"collection": self.collection_name},
            )

        matches: list[RawMatch] = []
        for position, hit in enumerate(points):
            score = getattr(hit, "score", None)
            if isinstance(score, bool) or not isinstance(score, int | float) or math.isnan(score):
                raise IndexQueryError(
                    "Malformed response from Qdrant: missing score",
                    context={"collection": self.collection_name, "position": position},
                )

            payload = getattr(hit, "payload", None) or {}
            if not isinstance(payload, Mapping):
                raise IndexQueryError(
                    "Malformed response from Qdrant: payload is not a mapping",
                    context={"collection": self.collection_name, "position": position},
                )

            metadata = {str(key): str(value) for key, value in payload.items() if value is not None}
            matches.append(RawMatch(score=float(score), metadata=metadata))

        if len(matches) > top_k:
            logger.warning("Qdrant returned %d matches for limit %d", len(matches), top_k)
            matches = matches[:top_k]

        return tuple(matches)

    async def collection_stats(self) -> dict[str, Any]:
        """Get statistics for the contract collection.

        Raises:
            IndexQueryError: If the collection cannot be inspected.
        """
        client = self._get_client()
        try:
            info = await client.get_collection(collection_name=self.collection_name)
        except Exception as e:
            raise IndexQueryError(
                f"Failed to get stats for {self.collection_name}",
                cause=e,
                context={"collection": self.collection_name},
            ) from e

        return {
            "name": self.collection_name,
            "count": info.points_count or 0,
            "status": str(info.status),
        }

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
