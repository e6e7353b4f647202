from __future__ import annotations

import datetime as dt

NOW = dt.datetime(2024, 6, 1, 0, 0, tzinfo=dt.timezone.utc)
TEMPLATE = (
    "<title>{{TITLE}}</title>\n"
    '<meta name="description" content="{{DESCRIPTION}}">\n'
    '<link rel="canonical" href="{{CANONICAL_URL}}">\n'
    '<meta property="og:image" content="{{OG_IMAGE_URL}}">\n'
    "<h1>{{TITLE_PLAIN}}</h1>\n"
    '<time datetime="{{PUBLISHED_AT_ISO}}">{{PUBLISHED_AT_FORMATTED}}</time>\n'
    '<meta itemprop="dateModified" content="{{UPDATED_AT_ISO}}">\n'
    "{{EYECATCH_HTML}}\n"
    "<article>{{BODY_HTML}}</article>\n"
    '<a href="{{SHARE_URL_TWITTER}}">X</a>\n'
    '<a href="{{SHARE_URL_FACEBOOK}}">Facebook</a>\n'
    '<a href="{{SHARE_URL_LINE}}">LINE</a>\n'
)


class FakeSource:
    """Serves canned pages in call order and records every request."""

    def __init__(self, pages: list[list[dict]], total: int) -> None:
        self.pages = pages
        self.total = total
        self.calls: list[dict] = []

    def get_page(self, limit: int, offset: int, filters: str) -> dict:
        index = len(self.calls)
        self.calls.append({"limit": limit, "offset": offset, "filters": filters})
        contents = self.pages[index] if index < len(self.pages) else []
        return {"contents": contents, "totalCount": self.total}


def make_article(slug: str = "hello", **overrides) -> dict:
    article = {
        "id": f"id-{slug or 'none'}",
        "slug": slug,
        "title": "Hello",
        "body": "<p>Hi there</p>",
        "publishedAt": "2024-01-10T03:00:00.000Z",
        "updatedAt": "2024-01-11T03:00:00.000Z",
    }
    article.update(overrides)
    return article
