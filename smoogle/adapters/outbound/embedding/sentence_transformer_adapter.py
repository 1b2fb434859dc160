"""Sentence-transformers embedding provider with process-wide lazy loading."""

import logging
import threading
from typing import Any

import numpy as np

from ....core.domain.exceptions import ModelLoadError
from ....core.ports.embedding_port import EmbedFn, EmbeddingProviderPort

logger = logging.getLogger(__name__)

DEFAULT_MODEL_NAME = "sentence-transformers/all-MiniLM-L6-v2"


def _to_numpy(output: Any) -> np.ndarray:
    """Convert encoder output (torch tensor, list or array) to a numpy array."""
    if isinstance(output, list) and len(output) == 1:
        output = output[0]
    if hasattr(output, "detach"):
        output = output.detach().cpu().numpy()
    return np.asarray(output)


class SentenceTransformerProvider(EmbeddingProviderPort):
    """Loads a SentenceTransformer model once and exposes its token embeddings.

    The returned function yields the per-token matrix (``tokens x dim``);
    pooling and normalization are left to the QueryEmbedder.
    """

    def __init__(self, model_name: str = DEFAULT_MODEL_NAME, device: str | None = None) -> None:
        """Initialize the provider without touching the model.

        Args:
            model_name: Hugging Face id or local path of the model.
                        Default is all-MiniLM-L6-v2 (384 dims).
            device: Torch device, or None to let sentence-transformers pick.
        """
        self.model_name = model_name
        self.device = device
        self._model: Any = None
        self._embed_fn: EmbedFn | None = None
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._embed_fn is not None

    def load(self) -> EmbedFn:
        """Return the embedding function, loading the model on first use.

        A failed load is not cached; the next call tries again.

        Raises:
            ModelLoadError: If the model cannot be fetched or initialized.
        """
        if self._embed_fn is not None:
            return self._embed_fn

        with self._lock:
            if self._embed_fn is None:
                self._model = self._load_model()
                self._embed_fn = self._make_embed_fn(self._model)
        return self._embed_fn

    def _load_model(self) -> Any:
        logger.info("Loading embedding model: %s", self.model_name)
        try:
            from sentence_transformers import SentenceTransformer

            model = SentenceTransformer(self.model_name, device=self.device)
        except Exception as e:
            raise ModelLoadError(
                f"Failed to load embedding model {self.model_name}",
                cause=e,
                context={"model": self.model_name, "device": self.device},
            ) from e
        logger.info("Embedding model loaded")
        return model

    @staticmethod
    def _make_embed_fn(model: Any) -> EmbedFn:
        def embed(text: str) -> np.ndarray:
            output = model.encode(
                text,
                output_value="token_embeddings",
                convert_to_numpy=True,
                show_progress_bar=False,
            )
            return _to_numpy(output)

        return embed

    def get_dimension(self) -> int:
        """Get the embedding dimension reported by the model."""
        self.load()
        return int(self._model.get_sentence_embedding_dimension())
