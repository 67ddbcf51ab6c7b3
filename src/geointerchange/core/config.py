"""
Configuration settings for geointerchange.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Library settings with environment variable support.

    Attributes:
        max_nesting_depth: Deepest collection nesting accepted by read and write
        use_geos: Whether the shapely geometry engine may be used
        log_level: Level applied by setup_logging when none is given
        log_format: Output format applied by setup_logging
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="GEOINTERCHANGE_",
        extra="ignore",
    )

    # Adapter settings
    max_nesting_depth: int = Field(default=64, ge=1)

    # Geometry engine toggle
    use_geos: bool = True

    # Logging
    log_level: str = "INFO"
    log_format: Literal["text", "json"] = "text"


# Global settings instance
settings = Settings()


def geos_installed() -> bool:
    """Report whether the external geometry engine is enabled."""
    return settings.use_geos
