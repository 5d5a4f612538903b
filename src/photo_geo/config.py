"""Configuration management for photo_geo.

Supports configuration via:
1. Environment variables
2. Dependency Injection (constructor parameters)
3. Default values

Environment Variables:
    PHOTO_GEO_DUPLICATE_THRESHOLD_M: Duplicate grouping radius in meters (default: 10)
    PHOTO_GEO_VERY_CLOSE_THRESHOLD_M: "Very close" flag radius in meters (default: 25)
    PHOTO_GEO_NEARBY_RADIUS_KM: Default nearby search radius in km (default: 1)
    PHOTO_GEO_LOW_CONFIDENCE_THRESHOLD: Extraction confidence warning level (default: 0.7)
    PHOTO_GEO_MAX_SCAN_DEPTH: Recursion bound for OCR payload scans (default: 32)
    PHOTO_GEO_BATCH_SIZE: Photos located concurrently per batch (default: 5)
    PHOTO_GEO_MAX_WORKERS: Max async workers (default: 4)
    PHOTO_GEO_LOG_FORMAT: Log format - 'json' or 'text' (default: json)
    PHOTO_GEO_LOG_LEVEL: Log level (default: INFO)
"""

import warnings
from typing import Optional, Literal

from pydantic import Field, ValidationError as PydanticValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings

from .exceptions import ConfigurationError


class GeoSettings(BaseSettings):
    """Toolkit configuration with environment variable support.

    Settings are loaded from environment variables with PHOTO_GEO_ prefix.
    All values are validated on load to ensure safe operation.
    """

    duplicate_threshold_m: float = Field(
        default=10.0,
        gt=0.0,
        description="Seed-relative duplicate grouping radius in meters"
    )
    very_close_threshold_m: float = Field(
        default=25.0,
        gt=0.0,
        description="Distance from a group seed below which items are flagged very close"
    )
    nearby_radius_km: float = Field(
        default=1.0,
        gt=0.0,
        description="Default radius for nearby searches in kilometers"
    )
    low_confidence_threshold: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Extraction matches below this confidence are flagged (0.0 - 1.0)"
    )
    max_scan_depth: int = Field(
        default=32,
        ge=1,
        le=256,
        description="Maximum nesting depth scanned in structured OCR payloads"
    )
    batch_size: int = Field(
        default=5,
        ge=1,
        le=64,
        description="Number of photos located concurrently per batch (1-64)"
    )
    max_workers: int = Field(
        default=4,
        ge=1,
        le=32,
        description="Maximum number of async worker threads (1-32)"
    )
    log_format: Literal["json", "text"] = Field(
        default="json",
        description="Log format: 'json' for structured, 'text' for human-readable"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level"
    )

    model_config = {
        "env_prefix": "PHOTO_GEO_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @field_validator("nearby_radius_km")
    @classmethod
    def validate_nearby_radius(cls, v: float) -> float:
        """Keep the search radius below half the Earth's circumference."""
        if v > 20000:
            raise ValueError("Nearby radius exceeds reasonable limit (20000 km)")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Normalize log level to uppercase."""
        if isinstance(v, str):
            return v.upper()
        return v

    @model_validator(mode="after")
    def validate_settings_combination(self) -> "GeoSettings":
        """Validate combinations of settings that may have interdependencies."""
        if self.very_close_threshold_m < self.duplicate_threshold_m:
            warnings.warn(
                f"Very-close threshold ({self.very_close_threshold_m} m) is smaller than "
                f"the duplicate threshold ({self.duplicate_threshold_m} m); "
                "some grouped items will not be flagged.",
                UserWarning
            )
        return self

    @classmethod
    def from_env(cls) -> "GeoSettings":
        """Create settings from environment variables.

        Raises:
            ConfigurationError: If an environment value fails validation.
        """
        try:
            return cls()
        except PydanticValidationError as e:
            first_error = e.errors()[0]
            field = ".".join(str(loc) for loc in first_error.get("loc", [])) or "settings"
            raise ConfigurationError(
                field, first_error.get("input"), first_error.get("msg", "validation failed")
            )

    def with_overrides(
        self,
        duplicate_threshold_m: Optional[float] = None,
        very_close_threshold_m: Optional[float] = None,
        nearby_radius_km: Optional[float] = None,
        batch_size: Optional[int] = None,
        max_workers: Optional[int] = None,
        log_format: Optional[str] = None,
        log_level: Optional[str] = None,
    ) -> "GeoSettings":
        """Create new settings with overridden values (DI pattern)."""
        return self.model_copy(update={
            key: value for key, value in {
                "duplicate_threshold_m": duplicate_threshold_m,
                "very_close_threshold_m": very_close_threshold_m,
                "nearby_radius_km": nearby_radius_km,
                "batch_size": batch_size,
                "max_workers": max_workers,
                "log_format": log_format,
                "log_level": log_level.upper() if log_level else None,
            }.items() if value is not None
        })


# Global default settings instance (can be overridden)
_settings: Optional[GeoSettings] = None


def get_settings() -> GeoSettings:
    """Get current settings (lazy initialization from env)."""
    global _settings
    if _settings is None:
        _settings = GeoSettings.from_env()
    return _settings


def configure(settings: GeoSettings) -> None:
    """Configure global settings (useful for testing or DI)."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to reload from environment (useful for testing)."""
    global _settings
    _settings = None
