"""
Core BoardCache Package

Contains the cache building blocks, configuration, metrics and error
handling shared by the article cache.
"""

from boardcache.core.exceptions import (
    BoardCacheError,
    ConfigurationError,
    ValidationError,
    RepositoryError,
    ErrorCode,
    ErrorContext,
    RecoverySuggestion
)

__all__ = [
    'BoardCacheError',
    'ConfigurationError',
    'ValidationError',
    'RepositoryError',
    'ErrorCode',
    'ErrorContext',
    'RecoverySuggestion'
]
