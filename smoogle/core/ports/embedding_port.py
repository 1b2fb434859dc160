"""Embedding Port Interface."""

from abc import ABC, abstractmethod
from collections.abc import Callable

import numpy as np

# text -> model-native output (per-token matrix, not yet pooled or normalized)
EmbedFn = Callable[[str], np.ndarray]


class EmbeddingProviderPort(ABC):
    """Abstract interface for a lazily loaded text embedding model."""

    @abstractmethod
    def load(self) -> EmbedFn:
        """Return the embedding function, initializing the model at most once."""
        ...
