"""
Article Collaborator Interfaces

Abstract base classes for the services the article cache depends on but
does not implement: the persistent article repository and the service that
organizes raw records into display-ready view records.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from boardcache.articles.query import Query


class ArticleRepository(ABC):
    """
    Persistent article store.

    Both methods may block on I/O and may raise RepositoryError; the cache
    treats that as a skipped refresh.
    """

    @abstractmethod
    def query(self, query: Query) -> List[Dict[str, Any]]:
        """
        Run a filtered, sorted, limited query.

        Args:
            query: Query description

        Returns:
            Matching records in query order

        Raises:
            RepositoryError: If the query fails
        """

    @abstractmethod
    def fetch_random(self, limit: int) -> List[Dict[str, Any]]:
        """
        Select up to ``limit`` records pseudo-randomly.

        Raises:
            RepositoryError: If the selection fails
        """


class ArticleOrganizer(ABC):
    """Enriches raw article records into view records for display."""

    @abstractmethod
    def organize(self, articles: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Enrich articles for rendering, preserving their order.

        Args:
            articles: Raw records returned by the repository

        Returns:
            View records
        """
