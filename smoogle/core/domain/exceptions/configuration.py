"""Configuration-related exceptions for Smoogle."""

from .base import SmoogleError


class ConfigurationError(SmoogleError):
    """Configuration or environment variable errors.

    Raised when required configuration is missing or invalid.
    """

    error_code = "SMG_CFG_001"


class MissingConfigurationError(ConfigurationError):
    """Required setting is not configured."""

    error_code = "SMG_CFG_002"
