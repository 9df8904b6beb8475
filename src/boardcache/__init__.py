"""
BoardCache

In-process caching of discussion board articles, their abstracts and the
hot and random side lists.
"""

from boardcache.articles.cache import ArticleCache
from boardcache.core.config.models import AppConfig
from boardcache.core.exceptions import (
    BoardCacheError,
    ConfigurationError,
    RepositoryError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    'ArticleCache',
    'AppConfig',
    'BoardCacheError',
    'ConfigurationError',
    'RepositoryError',
    'ValidationError',
    '__version__',
]
