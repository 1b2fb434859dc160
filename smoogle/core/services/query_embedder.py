"""Query embedding: model invocation, mean pooling and L2 normalization."""

import asyncio
import logging

import numpy as np

from ..domain.exceptions import EmbeddingError, SmoogleError
from ..domain.utils import ensure_query
from ..ports.embedding_port import EmbeddingProviderPort

logger = logging.getLogger(__name__)

# Pooled vectors with a smaller norm cannot be normalized reliably
MIN_NORM = 1e-12


def mean_pool_and_normalize(raw: np.ndarray, dimension: int | None = None) -> np.ndarray:
    """Collapse per-token vectors into one unit-length vector.

    Args:
        raw: Model output, either ``tokens x dim`` or a single ``dim`` vector.
            A leading batch axis of size 1 is accepted and dropped.
        dimension: Expected embedding dimension, if known.

    Returns:
        1-D float64 array with L2 norm 1.

    Raises:
        EmbeddingError: On unexpected shape, non-finite values or a zero vector.
    """
    try:
        tokens = np.asarray(raw, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise EmbeddingError("Model output is not numeric", cause=e) from e

    if tokens.ndim == 3 and tokens.shape[0] == 1:
        tokens = tokens[0]
    if tokens.ndim == 1:
        tokens = tokens[np.newaxis, :]
    if tokens.ndim != 2:
        raise EmbeddingError(
            "Unexpected model output rank",
            context={"shape": list(tokens.shape)},
        )

    n_tokens, dim = tokens.shape
    if n_tokens == 0 or dim == 0:
        raise EmbeddingError("Model returned an empty output", context={"shape": [n_tokens, dim]})
    if dimension is not None and dim != dimension:
        raise EmbeddingError(
            f"Expected embedding dimension {dimension}, got {dim}",
            context={"expected": dimension, "actual": dim},
        )
    if not np.all(np.isfinite(tokens)):
        raise EmbeddingError("Model output contains NaN or infinite values")

    pooled = tokens.mean(axis=0)
    norm = float(np.linalg.norm(pooled))
    if not np.isfinite(norm) or norm < MIN_NORM:
        raise EmbeddingError("Pooled embedding has zero norm", context={"norm": norm})
    return pooled / norm


class QueryEmbedder:
    """Turns query text into the unit-norm vector used for similarity search."""

    def __init__(self, provider: EmbeddingProviderPort, dimension: int | None = None) -> None:
        """Initialize the embedder.

        Args:
            provider: Source of the (lazily loaded) embedding function.
            dimension: Expected output dimension; None skips the check.
        """
        self.provider = provider
        self.dimension = dimension

    def embed_sync(self, text: str) -> np.ndarray:
        """Embed a query on the calling thread.

        Raises:
            InvalidQueryError: If the text is empty or whitespace only.
            ModelLoadError: If the model cannot be initialized.
            EmbeddingError: If the model output is malformed.
        """
        query = ensure_query(text)
        return self._embed(query)

    async def embed(self, text: str) -> np.ndarray:
        """Embed a query without blocking the event loop.

        Validation happens before any model work is scheduled.
        """
        query = ensure_query(text)
        return await asyncio.to_thread(self._embed, query)

    def _embed(self, query: str) -> np.ndarray:
        embed_fn = self.provider.load()
        try:
            raw = embed_fn(query)
        except SmoogleError:
            raise
        except Exception as e:
            raise EmbeddingError(
                "Embedding model failed to encode query",
                cause=e,
                context={"query_length": len(query)},
            ) from e

        vector = mean_pool_and_normalize(raw, self.dimension)
        logger.debug("Embedded query (%d chars) into %d dims", len(query), vector.shape[0])
        return vector
