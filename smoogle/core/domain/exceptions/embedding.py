"""Embedding exceptions for Smoogle."""

from .base import SmoogleError


class EmbeddingError(SmoogleError):
    """Model output could not be turned into a query embedding.

    Common causes:
    - Unexpected output dimensionality
    - Empty token sequence
    - NaN/inf values or a zero-norm pooled vector
    """

    error_code = "SMG_EMB_001"


class ModelLoadError(EmbeddingError):
    """Embedding model could not be fetched or initialized."""

    error_code = "SMG_EMB_002"
