"""
Article Record Fields

Article records are plain mappings. These names and constants describe the
fields the cache and the side list queries rely on.
"""

import time
from enum import IntEnum
from typing import Any, List, Mapping, Optional


# Record keys
KEY_ID = "id"
ARTICLE_TITLE = "title"
ARTICLE_PERMALINK = "permalink"
ARTICLE_AUTHOR_ID = "author_id"
ARTICLE_COMMENT_COUNT = "comment_count"
ARTICLE_TYPE = "type"
ARTICLE_TAGS = "tags"

# Fields a side list entry needs for link rendering
SIDE_ARTICLE_PROJECTION = (ARTICLE_TITLE, ARTICLE_PERMALINK, ARTICLE_AUTHOR_ID)

SANDBOX_TAG = "Sandbox"


class ArticleType(IntEnum):
    """Article types stored under ARTICLE_TYPE."""
    NORMAL = 0
    DISCUSSION = 1
    CITY_BROADCAST = 2
    THOUGHT = 3
    QNA = 5


def get_article_id(article: Mapping[str, Any]) -> Optional[str]:
    """Return the record's identifier, or None when it is missing or blank."""
    value = article.get(KEY_ID)
    if not isinstance(value, str) or not value.strip():
        return None
    return value


def parse_tags(tags: Any) -> List[str]:
    """Normalize a tag field to a list; strings are comma separated."""
    if tags is None:
        return []
    if isinstance(tags, str):
        return [tag.strip() for tag in tags.split(',') if tag.strip()]
    return [str(tag) for tag in tags]


def id_threshold(days: int, now: Optional[float] = None) -> str:
    """
    Smallest article id created within the last ``days`` days.

    Article ids are creation times in epoch milliseconds, so the threshold
    is the millisecond timestamp ``days`` days before ``now``.

    Args:
        days: Size of the window in days
        now: Reference time in epoch seconds (defaults to time.time())

    Returns:
        Threshold id as a decimal string
    """
    if now is None:
        now = time.time()
    return str(int((now - days * 86400) * 1000))
