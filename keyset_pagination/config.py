"""Configuration management for keyset pagination."""

from typing import List, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Pagination defaults with environment variable support."""

    # Page window
    default_limit: int = Field(default=10, ge=1)
    max_limit: Optional[int] = Field(default=None, ge=1)

    # Ordering
    default_order: str = "desc"
    default_keys: List[str] = ["id"]

    @field_validator("default_order")
    @classmethod
    def validate_default_order(cls, v):
        """Validate default order."""
        valid_orders = ["asc", "desc"]
        if v.lower() not in valid_orders:
            raise ValueError(f"Default order must be one of: {valid_orders}")
        return v.lower()

    @field_validator("default_keys")
    @classmethod
    def validate_default_keys(cls, v):
        """Validate that at least one key is configured."""
        if not v:
            raise ValueError("Default keys must not be empty")
        return v

    model_config = SettingsConfigDict(
        env_prefix="PAGINATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_parse_none_str="null",
    )


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get pagination settings."""
    return settings
