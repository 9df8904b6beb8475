"""
Tests for Configuration Models
"""

import logging

import pytest
from pydantic import ValidationError

from boardcache.core.config.models import AppConfig, CacheConfig, SideListConfig


class TestCacheConfig:
    """Test CacheConfig model."""

    def test_defaults(self):
        config = CacheConfig()
        assert config.article_count == 1024
        assert config.abstract_count == 1024
        assert config.metrics_enabled is True

    def test_abstract_count_follows_article_count(self):
        assert CacheConfig(article_count=32).abstract_count == 32

    def test_explicit_abstract_count(self):
        config = CacheConfig(article_count=32, abstract_count=8)
        assert config.abstract_count == 8

    @pytest.mark.parametrize("field", ['article_count', 'abstract_count'])
    @pytest.mark.parametrize("value", [0, -1])
    def test_rejects_non_positive_sizes(self, field, value):
        with pytest.raises(ValidationError):
            CacheConfig(**{field: value})


class TestSideListConfig:
    """Test SideListConfig model."""

    def test_defaults(self):
        config = SideListConfig()
        assert config.hot_articles_count == 10
        assert config.random_articles_count == 10
        assert config.hot_window_days == 7

    @pytest.mark.parametrize("kwargs", [
        {'hot_articles_count': 0},
        {'hot_articles_count': 101},
        {'random_articles_count': 0},
        {'hot_window_days': 0},
        {'hot_window_days': 366},
    ])
    def test_bounds(self, kwargs):
        with pytest.raises(ValidationError):
            SideListConfig(**kwargs)


class TestAppConfig:
    """Test AppConfig model."""

    def test_defaults(self):
        config = AppConfig()
        assert config.log_level == "INFO"
        assert config.verbose is False
        assert config.debug is False
        assert isinstance(config.cache, CacheConfig)
        assert isinstance(config.side_lists, SideListConfig)

    def test_nested_dicts(self):
        config = AppConfig(cache={'article_count': 64}, side_lists={'hot_articles_count': 3})
        assert config.cache.article_count == 64
        assert config.cache.abstract_count == 64
        assert config.side_lists.hot_articles_count == 3

    def test_log_level_is_normalized(self):
        assert AppConfig(log_level="warning").log_level == "WARNING"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            AppConfig(log_level="LOUD")

    @pytest.mark.parametrize("kwargs,expected", [
        ({}, logging.INFO),
        ({'log_level': 'ERROR'}, logging.ERROR),
        ({'log_level': 'ERROR', 'verbose': True}, logging.INFO),
        ({'log_level': 'DEBUG', 'verbose': True}, logging.DEBUG),
        ({'log_level': 'ERROR', 'debug': True}, logging.DEBUG),
    ])
    def test_effective_log_level(self, kwargs, expected):
        assert AppConfig(**kwargs).get_effective_log_level() == expected

    def test_json_round_trip(self):
        config = AppConfig(cache={'article_count': 10, 'abstract_count': 5})
        restored = AppConfig(**config.model_dump(mode='json'))
        assert restored.cache == config.cache
        assert restored.side_lists == config.side_lists
