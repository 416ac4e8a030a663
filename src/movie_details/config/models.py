"""Configuration data models."""

import os
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class TMDbConfig(BaseModel):
    """TMDb API configuration."""

    api_key: str = Field(..., description="TMDb API key")
    base_url: str = Field(default="https://api.themoviedb.org/3", description="TMDb API base URL")
    image_base_url: str = Field(
        default="https://image.tmdb.org/t/p/w500", description="Base URL for poster images"
    )
    language: str = Field(default="en-US", description="Default language for requests")
    timeout: int = Field(default=10, gt=0, description="Request timeout in seconds")
    retry_attempts: int = Field(default=3, ge=1, description="Attempts per read request")
    session_id: Optional[str] = Field(
        default=None, description="User session ID (a guest session is used when empty)"
    )
    account_id: int = Field(default=0, ge=0, description="Account ID for rated movie lookups")

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Expand environment variables in API key."""
        return os.path.expandvars(v)

    @field_validator("session_id")
    @classmethod
    def validate_session_id(cls, v: Optional[str]) -> Optional[str]:
        """Treat blank session IDs as unset."""
        if v is None:
            return None
        v = os.path.expandvars(v).strip()
        return v or None


class RatingConfig(BaseModel):
    """Rating submission configuration."""

    success_status_codes: List[int] = Field(
        default_factory=lambda: [1, 12],
        description="Status codes meaning the rating was stored",
    )
    min_value: float = Field(default=0.5, gt=0.0, description="Lowest accepted rating")
    max_value: float = Field(default=10.0, gt=0.0, description="Highest accepted rating")

    @field_validator("max_value")
    @classmethod
    def validate_range(cls, v: float, info: ValidationInfo) -> float:
        """Validate that the rating range is not empty."""
        min_value = info.data.get("min_value")
        if min_value is not None and v < min_value:
            raise ValueError(f"max_value must be >= min_value, got {v} < {min_value}")
        return v


class WatchHistoryConfig(BaseModel):
    """Watch history store configuration."""

    path: str = Field(
        default="~/.movie_details/watch_history.jsonl", description="Watch history file path"
    )
    media_type: str = Field(default="movie", description="Media type recorded for movie views")

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Expand environment variables and home directory in path."""
        return os.path.expanduser(os.path.expandvars(v))


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string",
    )
    file: Optional[str] = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, gt=0, description="Maximum log file size in MB")
    backup_count: int = Field(default=5, ge=0, description="Number of backup log files")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate logging level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Logging level must be one of: {allowed}")
        return v.upper()


class Config(BaseModel):
    """Main configuration model."""

    tmdb: TMDbConfig = Field(..., description="TMDb configuration")
    rating: RatingConfig = Field(default_factory=RatingConfig, description="Rating configuration")
    watch_history: WatchHistoryConfig = Field(
        default_factory=WatchHistoryConfig, description="Watch history configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    model_config = ConfigDict(
        validate_assignment=True,
        populate_by_name=True,
    )
