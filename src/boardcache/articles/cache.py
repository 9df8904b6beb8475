"""
Article Cache

Single entry point for cached article records, their abstracts and the hot
and random side lists.
"""

import copy
import logging
import time
from contextlib import nullcontext
from typing import Any, Callable, Dict, List, Mapping, Optional

from boardcache.articles.interfaces import ArticleOrganizer, ArticleRepository
from boardcache.articles.model import (
    ARTICLE_COMMENT_COUNT,
    ARTICLE_TAGS,
    ARTICLE_TYPE,
    KEY_ID,
    SANDBOX_TAG,
    SIDE_ARTICLE_PROJECTION,
    ArticleType,
    get_article_id,
    id_threshold,
)
from boardcache.articles.query import (
    CompositeFilter,
    CompositeFilterOperator,
    FilterOperator,
    PropertyFilter,
    Query,
    Sort,
    SortDirection,
)
from boardcache.core.cache import BoundedCache, SnapshotList
from boardcache.core.config.models import AppConfig
from boardcache.core.exceptions import ErrorCode, ErrorContext, ValidationError
from boardcache.core.monitoring.metrics import MetricsCollector


logger = logging.getLogger(__name__)


class ArticleCache:
    """
    Article cache.

    Holds two bounded LRU caches, one for article records and one for
    article abstracts keyed by the same id, plus two side lists that are
    only ever replaced by an explicit load.

    Article records are deep-copied on the way in and on the way out, so no
    caller ever shares an instance with the cache or with another caller.
    Writing or removing an article always drops its cached abstract; a
    ``put_article_abstract`` racing with that purge may leave a stale
    abstract until the article is written again.

    Construct one instance at start-up and share it. Only the ``load_side_*``
    methods talk to the repository; something outside this class decides
    when to call them.
    """

    def __init__(
        self,
        repository: ArticleRepository,
        organizer: ArticleOrganizer,
        article_cache_size: int = 1024,
        abstract_cache_size: Optional[int] = None,
        side_hot_articles_count: int = 10,
        side_random_articles_count: int = 10,
        hot_window_days: int = 7,
        metrics: Optional[MetricsCollector] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize article cache.

        Args:
            repository: Persistent article repository
            organizer: Service turning raw records into view records
            article_cache_size: Capacity of the article cache
            abstract_cache_size: Capacity of the abstract cache (defaults to article_cache_size)
            side_hot_articles_count: Maximum size of the side hot list
            side_random_articles_count: Size of the side random list
            hot_window_days: Age limit, in days, of side hot articles
            metrics: Optional collector for cache and refresh metrics
            clock: Source of the current time in epoch seconds

        Raises:
            ConfigurationError: If a cache capacity is smaller than 1
        """
        if abstract_cache_size is None:
            abstract_cache_size = article_cache_size

        self._repository = repository
        self._organizer = organizer
        self._metrics = metrics
        self._clock = clock

        self.side_hot_articles_count = side_hot_articles_count
        self.side_random_articles_count = side_random_articles_count
        self.hot_window_days = hot_window_days

        self._articles = BoundedCache("articles", article_cache_size, metrics)
        self._abstracts = BoundedCache("article_abstracts", abstract_cache_size, metrics)
        self._side_hot_articles = SnapshotList("side hot articles")
        self._side_random_articles = SnapshotList("side random articles")

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        repository: ArticleRepository,
        organizer: ArticleOrganizer,
        metrics: Optional[MetricsCollector] = None,
    ) -> "ArticleCache":
        """
        Build an article cache from application configuration.

        Each instance gets its own metrics collector when metrics are
        enabled and none is given, so two caches never share counters.
        """
        if metrics is None and config.cache.metrics_enabled:
            metrics = MetricsCollector()

        return cls(
            repository,
            organizer,
            article_cache_size=config.cache.article_count,
            abstract_cache_size=config.cache.abstract_count,
            side_hot_articles_count=config.side_lists.hot_articles_count,
            side_random_articles_count=config.side_lists.random_articles_count,
            hot_window_days=config.side_lists.hot_window_days,
            metrics=metrics,
        )

    # Articles

    def get_article(self, article_id: str) -> Optional[Dict[str, Any]]:
        """
        Gets an article by the specified article id.

        Returns:
            An independent copy of the cached article, or None if not cached
        """
        article = self._articles.get(article_id)
        if article is None:
            return None

        return copy.deepcopy(article)

    def put_article(self, article: Mapping[str, Any]) -> None:
        """
        Adds or updates the specified article and drops its cached abstract.

        Raises:
            ValidationError: If the article has no non-empty string id
        """
        if not isinstance(article, Mapping):
            raise ValidationError(
                f"Article must be a mapping, got {type(article).__name__}",
                error_code=ErrorCode.VALIDATION_TYPE_MISMATCH,
                context=ErrorContext(operation="put_article")
            )

        article_id = get_article_id(article)
        if article_id is None:
            raise ValidationError(
                "Article has no id",
                error_code=ErrorCode.VALIDATION_MISSING_FIELD,
                field_name=KEY_ID,
                field_value=article.get(KEY_ID),
                context=ErrorContext(operation="put_article")
            )

        self._articles.put(article_id, copy.deepcopy(dict(article)))
        self._abstracts.remove(article_id)

    def remove_article(self, article_id: str) -> None:
        """Removes an article and its abstract by the specified article id."""
        self._articles.remove(article_id)
        self._abstracts.remove(article_id)

    # Abstracts

    def get_article_abstract(self, article_id: str) -> Optional[str]:
        """
        Gets an article abstract by the specified article id.

        Returns:
            The cached abstract, or None if not cached
        """
        return self._abstracts.get(article_id)

    def put_article_abstract(self, article_id: str, abstract: str) -> None:
        """
        Puts an article abstract by the specified article id.

        The article cache itself is not touched.

        Raises:
            ValidationError: If the id is empty or the abstract is not a string
        """
        if not isinstance(article_id, str) or not article_id.strip():
            raise ValidationError(
                "Article abstract needs an article id",
                error_code=ErrorCode.VALIDATION_MISSING_FIELD,
                field_name=KEY_ID,
                field_value=article_id,
                context=ErrorContext(operation="put_article_abstract")
            )
        if not isinstance(abstract, str):
            raise ValidationError(
                f"Article abstract must be a string, got {type(abstract).__name__}",
                error_code=ErrorCode.VALIDATION_TYPE_MISMATCH,
                context=ErrorContext(operation="put_article_abstract", article_id=article_id)
            )

        self._abstracts.put(article_id, abstract)

    # Side lists

    def get_side_hot_articles(self) -> List[Dict[str, Any]]:
        """Gets side hot articles, empty until the first successful load."""
        return self._side_hot_articles.get()

    def build_side_hot_query(self) -> Query:
        """
        Query selecting side hot articles.

        Recent articles (created within hot_window_days), excluding
        discussions and sandbox-tagged articles, most commented first and
        oldest first among equals.
        """
        threshold = id_threshold(self.hot_window_days, now=self._clock())

        return Query(
            filter=CompositeFilter(CompositeFilterOperator.AND, (
                PropertyFilter(KEY_ID, FilterOperator.GREATER_THAN_OR_EQUAL, threshold),
                PropertyFilter(ARTICLE_TYPE, FilterOperator.NOT_EQUAL, int(ArticleType.DISCUSSION)),
                PropertyFilter(ARTICLE_TAGS, FilterOperator.NOT_CONTAINS, SANDBOX_TAG),
            )),
            sorts=(
                Sort(ARTICLE_COMMENT_COUNT, SortDirection.DESCENDING),
                Sort(KEY_ID, SortDirection.ASCENDING),
            ),
            limit=self.side_hot_articles_count,
            projections=SIDE_ARTICLE_PROJECTION,
        )

    def load_side_hot_articles(self) -> bool:
        """
        Loads side hot articles.

        A failing repository query is logged and leaves the current list
        in place.

        Returns:
            True if the list was replaced
        """
        def load():
            articles = self._repository.query(self.build_side_hot_query())
            return self._organizer.organize(articles)

        with self._time_refresh("hot"):
            return self._side_hot_articles.refresh(load)

    def get_side_random_articles(self) -> List[Dict[str, Any]]:
        """Gets side random articles, empty until the first successful load."""
        return self._side_random_articles.get()

    def load_side_random_articles(self) -> bool:
        """
        Loads side random articles.

        A failing repository call is logged and leaves the current list
        in place.

        Returns:
            True if the list was replaced
        """
        def load():
            articles = self._repository.fetch_random(self.side_random_articles_count)
            return self._organizer.organize(articles)

        with self._time_refresh("random"):
            return self._side_random_articles.refresh(load)

    def _time_refresh(self, list_name: str):
        if self._metrics is None:
            return nullcontext()
        return self._metrics.time_operation(f"side_articles.{list_name}.refresh_time")

    @property
    def metrics(self) -> Optional[MetricsCollector]:
        """Collector receiving this cache's metrics, None when disabled."""
        return self._metrics

    def _side_list_info(self, list_name: str, snapshot) -> Dict[str, Any]:
        info = {
            "size": len(snapshot),
            "refreshed_at": snapshot.refreshed_at,
        }
        if self._metrics:
            timer = self._metrics.get_metric(f"side_articles.{list_name}.refresh_time")
            summary = timer.get_summary() if timer else None
            info["refreshes"] = summary.count if summary else 0
            info["avg_refresh_seconds"] = summary.avg if summary else 0.0
        return info

    def get_cache_info(self) -> Dict[str, Any]:
        """Get statistics for both caches, both side lists and all metrics."""
        info = {
            "articles": self._articles.get_cache_info(),
            "article_abstracts": self._abstracts.get_cache_info(),
            "side_hot_articles": self._side_list_info("hot", self._side_hot_articles),
            "side_random_articles": self._side_list_info("random", self._side_random_articles),
        }
        if self._metrics:
            info["metrics"] = self._metrics.snapshot()
        return info
