"""Custom exception hierarchy for Smoogle.

Each exception carries an error code, the raise-site location, an optional
chained cause and free-form context, and serializes to JSON via ``to_dict``.

    from smoogle.core.domain.exceptions import SmoogleError, IndexQueryError
"""

# Base classes
from .base import RaiseSite, SmoogleError

# Configuration exceptions
from .configuration import ConfigurationError, MissingConfigurationError

# Embedding exceptions
from .embedding import EmbeddingError, ModelLoadError

# Validation exceptions
from .validation import InvalidQueryError, InvalidTopKError, ValidationError

# Vector store exceptions
from .vector_store import IndexConnectionError, IndexQueryError, VectorStoreError

__all__ = [
    # Base
    "RaiseSite",
    "SmoogleError",
    # Configuration
    "ConfigurationError",
    "MissingConfigurationError",
    # Embedding
    "EmbeddingError",
    "ModelLoadError",
    # Validation
    "ValidationError",
    "InvalidQueryError",
    "InvalidTopKError",
    # Vector Store
    "VectorStoreError",
    "IndexQueryError",
    "IndexConnectionError",
]
