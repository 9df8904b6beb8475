"""
Test Configuration and Fixtures

Shared fixtures for the test suite: sample article records, an in-memory
article repository, a recording organizer and ready-made article caches.
"""

import copy
import random
from typing import Any, Dict, List, Optional

import pytest

from boardcache.articles.cache import ArticleCache
from boardcache.articles.interfaces import ArticleOrganizer, ArticleRepository
from boardcache.articles.model import ArticleType
from boardcache.articles.query import Query
from boardcache.core.exceptions import ErrorCode, RepositoryError
from boardcache.core.monitoring.metrics import MetricsCollector


# Fixed "now" for every test touching the hot list window
NOW = 1_700_000_000.0
DAY_MS = 86_400_000


def article_id_days_ago(days: float, offset_ms: int = 0) -> str:
    """Article id for an article created ``days`` days before NOW."""
    return str(int(NOW * 1000) - int(days * DAY_MS) + offset_ms)


class InMemoryArticleRepository(ArticleRepository):
    """Article repository backed by a list, evaluating queries in memory."""

    def __init__(self, articles: Optional[List[Dict[str, Any]]] = None, seed: int = 42):
        self.articles = list(articles or [])
        self.queries: List[Query] = []
        self.random_limits: List[int] = []
        self.fail = False
        self._random = random.Random(seed)

    def query(self, query: Query) -> List[Dict[str, Any]]:
        self.queries.append(query)
        if self.fail:
            raise RepositoryError(
                "database is unavailable",
                error_code=ErrorCode.REPOSITORY_UNAVAILABLE,
                operation="query"
            )
        return query.apply(copy.deepcopy(self.articles))

    def fetch_random(self, limit: int) -> List[Dict[str, Any]]:
        self.random_limits.append(limit)
        if self.fail:
            raise RepositoryError(
                "database is unavailable",
                error_code=ErrorCode.REPOSITORY_UNAVAILABLE,
                operation="fetch_random"
            )
        count = min(limit, len(self.articles))
        return copy.deepcopy(self._random.sample(self.articles, count))


class RecordingOrganizer(ArticleOrganizer):
    """Organizer that marks records as organized and remembers its calls."""

    def __init__(self):
        self.calls: List[List[Dict[str, Any]]] = []

    def organize(self, articles: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        self.calls.append(articles)
        return [dict(article, organized=True) for article in articles]


@pytest.fixture
def now() -> float:
    """The fixed clock value used by article_cache."""
    return NOW


@pytest.fixture
def make_article_id():
    """Factory for article ids created some days before NOW."""
    return article_id_days_ago


@pytest.fixture
def sample_article() -> Dict[str, Any]:
    """A complete article record."""
    return {
        'id': article_id_days_ago(1),
        'title': 'Sample Article Title',
        'permalink': '/article/sample',
        'author_id': 'author-1',
        'comment_count': 12,
        'type': int(ArticleType.NORMAL),
        'tags': ['python', 'caching'],
        'content': 'Body of the article',
        'participants': [{'name': 'alice'}, {'name': 'bob'}],
    }


@pytest.fixture
def board_articles() -> List[Dict[str, Any]]:
    """Articles covering every side hot list rule."""
    return [
        {'id': article_id_days_ago(1), 'title': 'Busy', 'permalink': '/a/busy',
         'author_id': 'u1', 'comment_count': 50, 'type': int(ArticleType.NORMAL), 'tags': 'python,web'},
        {'id': article_id_days_ago(2), 'title': 'Tied older', 'permalink': '/a/tied-older',
         'author_id': 'u2', 'comment_count': 20, 'type': int(ArticleType.NORMAL), 'tags': 'python'},
        {'id': article_id_days_ago(1, offset_ms=5), 'title': 'Tied newer', 'permalink': '/a/tied-newer',
         'author_id': 'u3', 'comment_count': 20, 'type': int(ArticleType.QNA), 'tags': 'help'},
        {'id': article_id_days_ago(3), 'title': 'Quiet', 'permalink': '/a/quiet',
         'author_id': 'u4', 'comment_count': 1, 'type': int(ArticleType.THOUGHT), 'tags': []},
        {'id': article_id_days_ago(1), 'title': 'Discussion', 'permalink': '/a/discussion',
         'author_id': 'u5', 'comment_count': 99, 'type': int(ArticleType.DISCUSSION), 'tags': 'python'},
        {'id': article_id_days_ago(2), 'title': 'Sandboxed', 'permalink': '/a/sandbox',
         'author_id': 'u6', 'comment_count': 80, 'type': int(ArticleType.NORMAL), 'tags': 'Sandbox,test'},
        {'id': article_id_days_ago(10), 'title': 'Too old', 'permalink': '/a/old',
         'author_id': 'u7', 'comment_count': 70, 'type': int(ArticleType.NORMAL), 'tags': 'python'},
    ]


@pytest.fixture
def repository(board_articles) -> InMemoryArticleRepository:
    return InMemoryArticleRepository(board_articles)


@pytest.fixture
def organizer() -> RecordingOrganizer:
    return RecordingOrganizer()


@pytest.fixture
def metrics() -> MetricsCollector:
    """A fresh metrics collector, isolated from the global one."""
    return MetricsCollector()


@pytest.fixture
def article_cache(repository, organizer, metrics) -> ArticleCache:
    """Article cache with small capacities and a fixed clock."""
    return ArticleCache(
        repository,
        organizer,
        article_cache_size=4,
        side_hot_articles_count=3,
        side_random_articles_count=2,
        metrics=metrics,
        clock=lambda: NOW,
    )


# Pytest Configuration
def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "cli: marks tests exercising the command-line interface"
    )
