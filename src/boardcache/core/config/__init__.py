"""
Configuration Management Package

Provides Pydantic-based configuration models and management for BoardCache.
"""

from boardcache.core.config.models import AppConfig, CacheConfig, SideListConfig
from boardcache.core.config.manager import ConfigManager

__all__ = [
    "AppConfig",
    "CacheConfig",
    "SideListConfig",
    "ConfigManager",
]
