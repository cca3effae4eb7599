"""Configuration models for birdcatalog.

This module contains all configuration-related Pydantic models used throughout the application.
"""

from enum import StrEnum

from pydantic import BaseModel, Field, field_validator


class ResponsiveUrlOrder(StrEnum):
    """How the displayable URL is picked from an image's responsive variants."""

    DOCUMENT = "document"  # First variant as it appears in the source document
    KEY = "key"  # Variant with the lexicographically smallest descriptor


class LoggingConfig(BaseModel):
    """Structlog-based logging configuration."""

    level: str = "INFO"
    json_logs: bool | None = None  # None = auto-detect based on environment
    include_caller: bool = False  # Include file:line info (useful for debugging)
    extra_fields: dict[str, str] = Field(default_factory=lambda: {"service": "birdcatalog"})

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level name."""
        if v.upper() not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level '{v}'.")
        return v.upper()


class FetchConfig(BaseModel):
    """Image host fetch settings."""

    timeout: float = Field(default=30.0, gt=0)  # Request timeout in seconds
    max_concurrent_fetches: int | None = Field(default=6, ge=1)  # None = unbounded
    # Wikimedia rejects requests without a descriptive User-Agent
    user_agent: str = "birdcatalog/0.1 (+https://github.com/birdcatalog/birdcatalog)"


class CatalogConfig(BaseModel):
    """Configuration settings for the birdcatalog application."""

    # Catalog data
    data_dir: str | None = None  # None = data bundled with the package
    groups_file: str = "bird-groups.json"
    details_file: str = "bird-details.json"
    image_meta_file: str = "image-meta.json"
    group_image_meta_file: str = "bird-groups-image-meta.json"

    # Image resolution
    preview_limit: int = Field(default=3, ge=1)  # Images shown in preview strips
    extra_denylist: list[str] = Field(default_factory=list)  # Added to the built-in denylist
    responsive_url_order: ResponsiveUrlOrder = ResponsiveUrlOrder.DOCUMENT

    fetch: FetchConfig = Field(default_factory=FetchConfig)

    # Logging settings
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
