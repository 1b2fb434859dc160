"""Vector store exceptions for Smoogle."""

from .base import SmoogleError


class VectorStoreError(SmoogleError):
    """Base error for vector store operations."""

    error_code = "SMG_VEC_001"


class IndexQueryError(VectorStoreError):
    """Nearest-neighbor query against the index failed.

    Common causes:
    - Network failure or timeout
    - Invalid API key
    - Collection does not exist
    - Malformed response payload
    """

    error_code = "SMG_VEC_002"


class IndexConnectionError(IndexQueryError):
    """Failed to create a client for the index service."""

    error_code = "SMG_VEC_003"
