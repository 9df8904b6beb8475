"""
Articles Package

The article cache facade, the article record model, repository query
descriptions and the collaborator interfaces the cache depends on.
"""

from boardcache.articles.cache import ArticleCache
from boardcache.articles.interfaces import ArticleOrganizer, ArticleRepository
from boardcache.articles.model import ArticleType
from boardcache.articles.query import (
    CompositeFilter,
    CompositeFilterOperator,
    FilterOperator,
    PropertyFilter,
    Query,
    Sort,
    SortDirection,
)

__all__ = [
    'ArticleCache',
    'ArticleOrganizer',
    'ArticleRepository',
    'ArticleType',
    'CompositeFilter',
    'CompositeFilterOperator',
    'FilterOperator',
    'PropertyFilter',
    'Query',
    'Sort',
    'SortDirection',
]
