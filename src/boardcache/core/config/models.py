"""
Configuration Models

Pydantic models for type-safe configuration of cache capacities, side list
sizes and logging.
"""

import logging
from typing import Optional
from pydantic import BaseModel, Field, field_validator, model_validator


class CacheConfig(BaseModel):
    """Configuration for the article and abstract caches."""

    article_count: int = Field(
        default=1024,
        ge=1,
        description="Maximum number of article records held in memory"
    )
    abstract_count: Optional[int] = Field(
        default=None,
        ge=1,
        description="Maximum number of article abstracts (defaults to article_count)"
    )
    metrics_enabled: bool = Field(
        default=True,
        description="Record hit, miss and eviction metrics"
    )

    @model_validator(mode='after')
    def default_abstract_count(self):
        """Size the abstract cache like the article cache unless set."""
        if self.abstract_count is None:
            self.abstract_count = self.article_count
        return self


class SideListConfig(BaseModel):
    """Configuration for the hot and random side lists."""

    hot_articles_count: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Maximum number of entries in the side hot list"
    )
    random_articles_count: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Number of entries in the side random list"
    )
    hot_window_days: int = Field(
        default=7,
        ge=1,
        le=365,
        description="Only articles created within this many days are hot"
    )


class AppConfig(BaseModel):
    """Root application configuration model."""

    version: str = Field(default="0.1.0", description="Configuration version")

    cache: CacheConfig = Field(default_factory=CacheConfig, description="Cache configuration")
    side_lists: SideListConfig = Field(default_factory=SideListConfig, description="Side list configuration")

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    verbose: bool = Field(
        default=False,
        description="Enable verbose logging output"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode with detailed logging"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level is a standard logging level name."""
        level = v.upper()
        if level not in {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}:
            raise ValueError(f"Unsupported log level: {v}")
        return level

    def get_effective_log_level(self) -> int:
        """Resolve the logging level, letting debug and verbose win."""
        if self.debug:
            return logging.DEBUG
        if self.verbose:
            return min(logging.INFO, logging.getLevelName(self.log_level))
        return logging.getLevelName(self.log_level)
