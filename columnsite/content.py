from __future__ import annotations

import datetime as dt
from typing import Iterable, Optional

from .utils import parse_timestamp, to_utc


def article_slug(article: dict) -> str:
    return str(article.get("slug") or "").strip()


def is_safe_slug(slug: str) -> bool:
    """A slug must name exactly one directory below the columns folder."""
    return bool(slug) and slug not in {".", ".."} and not any(sep in slug for sep in ("/", "\\"))


def published_at(article: dict) -> Optional[dt.datetime]:
    try:
        return parse_timestamp(article.get("publishedAt"))
    except ValueError:
        return None


def updated_at(article: dict) -> Optional[dt.datetime]:
    try:
        value = parse_timestamp(article.get("updatedAt"))
    except ValueError:
        value = None
    return value or published_at(article)


def is_published(article: dict, now: dt.datetime) -> bool:
    """True when the article has a publish time that is not after ``now``.

    Scheduled posts are already excluded by the query filter; this repeats
    the check locally for rows a source returns anyway.
    """
    value = published_at(article)
    if value is None:
        return False
    return value <= to_utc(now)


def filter_published(articles: Iterable[dict], now: dt.datetime) -> list[dict]:
    return [article for article in articles if is_published(article, now)]
