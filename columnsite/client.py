from __future__ import annotations

import datetime as dt
import sys
from typing import Optional, Protocol

import requests

from .utils import iso_timestamp

PAGE_SIZE = 50
API_FIELDS = "id,slug,title,body,eyecatch,publishedAt,updatedAt,description"
API_ORDERS = "-publishedAt"
API_KEY_HEADER = "X-MICROCMS-API-KEY"


class PageSource(Protocol):
    def get_page(self, limit: int, offset: int, filters: str) -> dict: ...


class ContentClient:
    """Read-only client for a microCMS list endpoint."""

    def __init__(
        self,
        service_domain: str,
        api_key: str,
        endpoint: str = "news",
        timeout: Optional[float] = 30,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not service_domain or not api_key:
            raise ValueError("service_domain and api_key are required")
        self.base_url = f"https://{service_domain}.microcms.io/api/v1"
        self.endpoint = endpoint.strip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers[API_KEY_HEADER] = api_key

    @property
    def url(self) -> str:
        return f"{self.base_url}/{self.endpoint}"

    def get_page(self, limit: int, offset: int, filters: str) -> dict:
        params = {
            "fields": API_FIELDS,
            "limit": limit,
            "offset": offset,
            "orders": API_ORDERS,
            "filters": filters,
        }
        resp = self.session.get(self.url, params=params, timeout=self.timeout)
        if resp.status_code >= 400:
            print(f"Error: content API returned {resp.status_code} for {self.url}", file=sys.stderr)
            resp.raise_for_status()
        return parse_page(resp.json())


def parse_page(payload: object) -> dict:
    if not isinstance(payload, dict):
        raise ValueError("Content API response must be a JSON object.")
    contents = payload.get("contents")
    if not isinstance(contents, list):
        raise ValueError("Content API response is missing a 'contents' list.")
    total = payload.get("totalCount", len(contents))
    if isinstance(total, bool) or not isinstance(total, int):
        raise ValueError(f"Content API returned an invalid totalCount: {total!r}")
    return {"contents": contents, "totalCount": total}


def published_filter(now: dt.datetime) -> str:
    return f"publishedAt[less_than]{iso_timestamp(now)}"


def fetch_all_articles(
    source: PageSource, now: Optional[dt.datetime] = None, page_size: int = PAGE_SIZE
) -> list[dict]:
    """Collect every page from ``source``, newest first.

    Stops on an empty page or once ``totalCount`` rows are collected.
    Errors from the source propagate unchanged.
    """
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    if now is None:
        now = dt.datetime.now(dt.timezone.utc)
    filters = published_filter(now)
    print("Fetching articles from the content API...")
    articles: list[dict] = []
    offset = 0
    try:
        while True:
            page = source.get_page(limit=page_size, offset=offset, filters=filters)
            contents = page["contents"]
            if not contents:
                break
            articles.extend(contents)
            offset += len(contents)
            if offset >= page["totalCount"]:
                break
    except Exception as exc:
        print(f"Error: failed to fetch articles: {exc}", file=sys.stderr)
        raise
    print(f"Fetched {len(articles)} articles.")
    return articles
