from __future__ import annotations

import datetime as dt
import html
import json
import sys
from typing import Optional

from .assets import create_eyecatch_html, image_url, og_image_url
from .config import SiteConfig
from .content import article_slug, is_safe_slug, published_at, updated_at
from .render import escape_html, extract_description, render_template, write_text
from .utils import encode_component, format_long_date, iso_day, iso_timestamp, join_url, rfc822_date

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

WRITTEN = "written"
SKIPPED = "skipped"
FAILED = "failed"


def decorated_title(title: str, config: SiteConfig) -> str:
    return f"{title}{config.title_separator}{config.site_name}"


def share_urls(canonical_url: str, title: str) -> dict[str, str]:
    url = encode_component(canonical_url)
    text = encode_component(title)
    return {
        "SHARE_URL_TWITTER": f"https://twitter.com/intent/tweet?url={url}&text={text}",
        "SHARE_URL_FACEBOOK": f"https://www.facebook.com/sharer/sharer.php?u={url}",
        "SHARE_URL_LINE": f"https://social-plugins.line.me/lineit/share?url={url}&text={text}",
    }


def article_description(article: dict, config: SiteConfig) -> str:
    text = article.get("description") or extract_description(
        article.get("body"), config.description_length
    )
    return escape_html(text)


def article_context(article: dict, config: SiteConfig) -> dict[str, str]:
    """Template values for one published article, keyed by placeholder name."""
    slug = article_slug(article)
    raw_title = article.get("title") or ""
    title = decorated_title(raw_title, config)
    canonical_url = config.article_url(slug)
    published = published_at(article)
    updated = updated_at(article)
    eyecatch = article.get("eyecatch")
    context = {
        "TITLE": title,
        "TITLE_PLAIN": escape_html(raw_title),
        "DESCRIPTION": article_description(article, config),
        "CANONICAL_URL": canonical_url,
        "OG_IMAGE_URL": og_image_url(eyecatch, config.base_url, config.default_og_image),
        "PUBLISHED_AT_ISO": iso_timestamp(published),
        "UPDATED_AT_ISO": iso_timestamp(updated),
        "PUBLISHED_AT_FORMATTED": format_long_date(published, config.utc_offset_hours),
        "EYECATCH_HTML": create_eyecatch_html(eyecatch, raw_title),
        "BODY_HTML": article.get("body") or "",
    }
    context.update(share_urls(canonical_url, title))
    return context


def summary_record(article: dict, description: str) -> dict:
    return {
        "id": article.get("id"),
        "slug": article_slug(article),
        "title": article.get("title"),
        "publishedAt": article.get("publishedAt"),
        "eyecatchUrl": image_url(article.get("eyecatch")),
        "description": description,
    }


def build_article_pages(
    template: str, articles: list[dict], config: SiteConfig
) -> tuple[list[dict], list[dict]]:
    """Write ``<columns_dir>/<slug>/index.html`` for every article.

    Returns ``(outcomes, summary)``. A missing slug or a failed write only
    affects that article; the rest are still rendered.
    """
    outcomes: list[dict] = []
    summary: list[dict] = []
    print("Rendering article pages...")
    for article in articles:
        slug = article_slug(article)
        if not slug:
            print(f"Warning: article {article.get('id')} has no slug; skipping.", file=sys.stderr)
            outcomes.append(
                {"id": article.get("id"), "slug": "", "status": SKIPPED, "path": None, "error": "missing slug"}
            )
            continue
        if not is_safe_slug(slug):
            print(f"Warning: article {article.get('id')} has an unsafe slug {slug!r}; skipping.", file=sys.stderr)
            outcomes.append(
                {"id": article.get("id"), "slug": slug, "status": SKIPPED, "path": None, "error": "unsafe slug"}
            )
            continue
        output_path = config.article_dir(slug) / "index.html"
        context = article_context(article, config)
        outcome = {"id": article.get("id"), "slug": slug, "status": WRITTEN, "path": output_path, "error": None}
        try:
            write_text(output_path, render_template(template, **context))
        except OSError as exc:
            print(f"Error: failed to write {output_path}: {exc}", file=sys.stderr)
            outcome.update(status=FAILED, error=str(exc))
        outcomes.append(outcome)
        summary.append(summary_record(article, context["DESCRIPTION"]))
    written = sum(1 for outcome in outcomes if outcome["status"] == WRITTEN)
    print(f"Generated {written} article pages.")
    return outcomes, summary


def build_summary_index(records: list[dict], config: SiteConfig) -> bool:
    text = json.dumps(records, indent=2, ensure_ascii=False) if records else "[]"
    try:
        write_text(config.summary_path, text)
    except OSError as exc:
        print(f"Error: failed to write {config.summary_path}: {exc}", file=sys.stderr)
        return False
    print(f"Saved article index to {config.summary_path}")
    return True


def sitemap_entries(articles: list[dict], config: SiteConfig) -> list[dict]:
    entries = [{"loc": f"{config.base_url}/", "lastmod": None, "priority": "1.0", "changefreq": "daily"}]
    for page in config.static_pages:
        entries.append(
            {"loc": join_url(config.base_url, page), "lastmod": None, "priority": "0.8", "changefreq": "monthly"}
        )
    for article in articles:
        if not is_safe_slug(article_slug(article)):
            continue
        updated = updated_at(article)
        entries.append(
            {
                "loc": config.article_url(article_slug(article)),
                "lastmod": iso_day(updated) if updated else None,
                "priority": "0.6",
                "changefreq": "weekly",
            }
        )
    return entries


def render_sitemap(articles: list[dict], config: SiteConfig) -> str:
    items = []
    for entry in sitemap_entries(articles, config):
        lines = ["  <url>", f"    <loc>{html.escape(entry['loc'])}</loc>"]
        if entry["lastmod"]:
            lines.append(f"    <lastmod>{entry['lastmod']}</lastmod>")
        lines.append(f"    <priority>{entry['priority']}</priority>")
        lines.append(f"    <changefreq>{entry['changefreq']}</changefreq>")
        lines.append("  </url>")
        items.append("\n".join(lines))
    return "\n".join(
        [
            '<?xml version="1.0" encoding="UTF-8"?>',
            f'<urlset xmlns="{SITEMAP_NS}">',
            *items,
            "</urlset>",
            "",
        ]
    )


def build_sitemap(articles: list[dict], config: SiteConfig) -> bool:
    print("Generating sitemap.xml...")
    try:
        write_text(config.sitemap_path, render_sitemap(articles, config))
    except OSError as exc:
        print(f"Error: failed to write {config.sitemap_path}: {exc}", file=sys.stderr)
        return False
    print(f"Saved sitemap to {config.sitemap_path}")
    return True


def render_rss(articles: list[dict], config: SiteConfig, now: Optional[dt.datetime] = None) -> str:
    items = []
    linked = [article for article in articles if is_safe_slug(article_slug(article))]
    for article in linked[: config.feed_limit]:
        link = html.escape(config.article_url(article_slug(article)))
        items.append(
            "\n".join(
                [
                    "<item>",
                    f"<title>{html.escape(article.get('title') or '')}</title>",
                    f"<link>{link}</link>",
                    f"<guid>{link}</guid>",
                    f"<pubDate>{rfc822_date(published_at(article))}</pubDate>",
                    f"<description>{article_description(article, config)}</description>",
                    "</item>",
                ]
            )
        )
    if articles:
        last_build = rfc822_date(published_at(articles[0]))
    else:
        last_build = rfc822_date(now or dt.datetime.now(dt.timezone.utc))
    return "\n".join(
        [
            '<?xml version="1.0" encoding="UTF-8"?>',
            '<rss version="2.0">',
            "<channel>",
            f"<title>{html.escape(config.site_name)}</title>",
            f"<link>{config.base_url}/</link>",
            f"<description>{html.escape(config.site_description)}</description>",
            f"<lastBuildDate>{last_build}</lastBuildDate>",
            *items,
            "</channel>",
            "</rss>",
            "",
        ]
    )


def build_rss(articles: list[dict], config: SiteConfig, now: Optional[dt.datetime] = None) -> bool:
    try:
        write_text(config.rss_path, render_rss(articles, config, now))
    except OSError as exc:
        print(f"Error: failed to write {config.rss_path}: {exc}", file=sys.stderr)
        return False
    print(f"Saved RSS feed to {config.rss_path}")
    return True
