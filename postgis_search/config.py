"""
Configuration management for postgis-search.

Uses pydantic-settings for environment variable loading with sensible defaults.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings

from postgis_search.validation import validate_identifier


class Settings(BaseSettings):
    """postgis-search configuration."""

    # Database
    database_url: str = "postgresql://localhost:5432/postgis_search"

    # Tables and columns searched by default
    target_table: str = "objects"  # rows searched for (e.g. points of interest)
    shape_table: str = "objects"  # rows whose shapes get combined
    point_column: str = "geog_point"
    shape_column: str = "geog_shape"
    default_radius: float = 10_000  # meters

    # Server options
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    model_config = {
        "env_prefix": "PGS_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    @field_validator("target_table", "shape_table", "point_column", "shape_column")
    @classmethod
    def check_identifier(cls, v: str) -> str:
        return validate_identifier(v)


# Global settings instance
settings = Settings()
