"""Validation exceptions for Smoogle."""

from .base import SmoogleError


class ValidationError(SmoogleError):
    """Input validation failed."""

    error_code = "SMG_VAL_001"


class InvalidQueryError(ValidationError):
    """Query cannot be empty or whitespace only."""

    error_code = "SMG_VAL_002"


class InvalidTopKError(ValidationError):
    """Requested result count is outside the allowed range."""

    error_code = "SMG_VAL_003"
