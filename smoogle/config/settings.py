"""Configuration management for Smoogle."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _sanitize_secret(value: str) -> str:
    """Remove BOM characters and whitespace from secrets.

    Secrets pasted into .env files or CI variables may carry BOM
    characters that break HTTP headers.
    """
    if not value:
        return value
    return value.lstrip("\ufeff").strip()


class Settings(BaseSettings):
    """Application settings loaded from environment variables (``SMOOGLE_*``)."""

    model_config = SettingsConfigDict(
        env_prefix="SMOOGLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Qdrant settings
    qdrant_url: str = ""
    qdrant_api_key: str = ""
    collection_name: str = "contracts"
    request_timeout: int = Field(default=10, ge=1)

    @field_validator("qdrant_api_key", "qdrant_url", mode="after")
    @classmethod
    def sanitize_secrets(cls, value: str) -> str:
        """Remove BOM and whitespace from secret values."""
        return _sanitize_secret(value)

    # Model settings
    embedding_model: str = "sentence-transformers/all-MiniLM-L6-v2"
    embedding_dimension: int = 384
    embedding_device: str | None = None

    # Search settings
    top_k: int = Field(default=5, ge=1, le=100)

    # Logging
    log_level: str = "INFO"
    log_json: bool = False


# Global settings instance
settings = Settings()
