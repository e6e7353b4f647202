from __future__ import annotations

import argparse
import datetime as dt
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .client import ContentClient, PageSource, fetch_all_articles
from .config import STATIC_PAGES, SiteConfig, load_config, load_credentials
from .content import filter_published
from .pages import build_article_pages, build_rss, build_sitemap, build_summary_index
from .render import read_template
from .utils import parse_bool, parse_int


class BuildError(Exception):
    pass


@dataclass
class BuildReport:
    outcomes: list = field(default_factory=list)
    summary: list = field(default_factory=list)
    summary_written: bool = False
    sitemap_written: bool = False
    rss_written: Optional[bool] = None

    def count(self, status: str) -> int:
        return sum(1 for outcome in self.outcomes if outcome["status"] == status)


def build_site(config: SiteConfig, source: PageSource, now: Optional[dt.datetime] = None) -> BuildReport:
    """Fetch published articles from ``source`` and write every output file.

    Raises BuildError when the template is unreadable; fetch errors
    propagate as raised by the source.
    """
    if now is None:
        now = dt.datetime.now(dt.timezone.utc)
    print("Starting static page build.")
    try:
        template = read_template(config.template_path)
    except OSError as exc:
        print(f"Error: cannot read template {config.template_path}: {exc}", file=sys.stderr)
        raise BuildError(f"cannot read template {config.template_path}") from exc

    articles = fetch_all_articles(source, now=now, page_size=config.page_size)
    published = filter_published(articles, now)
    dropped = len(articles) - len(published)
    if dropped:
        print(f"Warning: ignored {dropped} articles without a past publish date.", file=sys.stderr)

    report = BuildReport()
    if not published:
        print("Warning: no published articles found.", file=sys.stderr)
    else:
        report.outcomes, report.summary = build_article_pages(template, published, config)
    report.summary_written = build_summary_index(report.summary, config)
    report.sitemap_written = build_sitemap(published, config)
    if config.enable_rss:
        report.rss_written = build_rss(published, config, now)
    print("Static page build finished.")
    return report


def main(argv: Optional[list[str]] = None) -> None:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument(
        "--config",
        default="site.toml",
        help="Path to site config file (TOML/YAML/JSON).",
    )
    pre_args, _ = pre_parser.parse_known_args(argv)
    config = load_config(Path(pre_args.config))
    defaults = SiteConfig()

    def cfg_value(key: str, default: object) -> object:
        value = config.get(key)
        return default if value is None else value

    def cfg_str(key: str, default: object) -> str:
        return str(cfg_value(key, default))

    def cfg_bool(key: str, default: bool) -> bool:
        value = cfg_value(key, default)
        return parse_bool(value) if value is not None else default

    def cfg_int(key: str, default: int) -> int:
        return parse_int(cfg_value(key, default), default)

    parser = argparse.ArgumentParser(description="Build static column pages from microCMS content.")
    parser.add_argument("--config", default=pre_args.config, help="Path to site config file (TOML/YAML/JSON).")
    parser.add_argument("--base-url", default=cfg_str("base_url", defaults.base_url), help="Public site URL.")
    parser.add_argument("--site-name", default=cfg_str("site_name", defaults.site_name), help="Site title.")
    parser.add_argument(
        "--site-description",
        default=cfg_str("site_description", defaults.site_description),
        help="Site description used in the RSS channel.",
    )
    parser.add_argument(
        "--columns-dir",
        default=cfg_str("columns_dir", defaults.columns_dir),
        help="Directory that receives one <slug>/index.html per article.",
    )
    parser.add_argument(
        "--template",
        default=cfg_str("template_path", cfg_value("template", defaults.template_path)),
        help="Article page template with {{NAME}} placeholders.",
    )
    parser.add_argument(
        "--summary-output",
        default=cfg_str("summary_path", cfg_value("summary_output", defaults.summary_path)),
        help="Path of the JSON article index.",
    )
    parser.add_argument(
        "--sitemap-output",
        default=cfg_str("sitemap_path", cfg_value("sitemap_output", defaults.sitemap_path)),
        help="Path of sitemap.xml.",
    )
    parser.add_argument(
        "--enable-rss",
        action=argparse.BooleanOptionalAction,
        default=cfg_bool("enable_rss", defaults.enable_rss),
        help="Generate rss.xml.",
    )
    parser.add_argument(
        "--rss-output",
        default=cfg_str("rss_path", cfg_value("rss_output", defaults.rss_path)),
        help="Path of rss.xml.",
    )
    parser.add_argument(
        "--feed-limit",
        default=cfg_int("feed_limit", defaults.feed_limit),
        type=int,
        help="Maximum number of articles in the RSS feed.",
    )
    parser.add_argument(
        "--endpoint",
        default=cfg_str("endpoint", defaults.endpoint),
        help="microCMS list endpoint holding the articles.",
    )
    parser.add_argument(
        "--page-size",
        default=cfg_int("page_size", defaults.page_size),
        type=int,
        help="Articles requested per API call.",
    )
    parser.add_argument(
        "--timeout",
        default=cfg_int("request_timeout", 30),
        type=int,
        help="Seconds to wait for each API response.",
    )
    parser.add_argument("--env-file", default=None, help="Optional .env file with the API credentials.")
    args = parser.parse_args(argv)

    offset_value = cfg_value("utc_offset_hours", defaults.utc_offset_hours)
    try:
        utc_offset_hours = float(offset_value)
    except (TypeError, ValueError):
        print(f"Invalid utc_offset_hours in config file {pre_args.config}: {offset_value!r}", file=sys.stderr)
        sys.exit(1)

    service_domain, api_key = load_credentials(Path(args.env_file) if args.env_file else None)
    site = SiteConfig(
        base_url=args.base_url,
        site_name=args.site_name,
        title_separator=cfg_str("title_separator", defaults.title_separator),
        site_description=args.site_description,
        columns_dir=Path(args.columns_dir),
        template_path=Path(args.template),
        summary_path=Path(args.summary_output),
        sitemap_path=Path(args.sitemap_output),
        rss_path=Path(args.rss_output),
        enable_rss=args.enable_rss,
        feed_limit=args.feed_limit,
        endpoint=args.endpoint,
        page_size=args.page_size,
        request_timeout=args.timeout,
        static_pages=cfg_value("static_pages", STATIC_PAGES),
        default_og_image=cfg_str("default_og_image", defaults.default_og_image),
        utc_offset_hours=utc_offset_hours,
        description_length=cfg_int("description_length", defaults.description_length),
        service_domain=service_domain,
        api_key=api_key,
    ).resolve_paths(Path.cwd())
    client = ContentClient(site.service_domain, site.api_key, site.endpoint, site.request_timeout)

    start = time.perf_counter()
    try:
        report = build_site(site, client)
    except Exception as exc:
        print(f"Error: build failed: {exc}", file=sys.stderr)
        sys.exit(1)
    elapsed = time.perf_counter() - start
    print(f"Build completed in {elapsed:.2f}s.")
    print(
        f"Pages written: {report.count('written')}, skipped: {report.count('skipped')}, "
        f"failed: {report.count('failed')}"
    )
