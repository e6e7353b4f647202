from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

try:
    import tomllib as toml
except ImportError:
    import tomli as toml

SERVICE_DOMAIN_ENV = "MICROCMS_SERVICE_DOMAIN"
API_KEY_ENV = "MICROCMS_API_KEY"
STATIC_PAGES = ("contact.html", "reservation.html", "privacy.html")


@dataclass
class SiteConfig:
    base_url: str = "https://kokuban-base.com"
    site_name: str = "Kokuban BASE"
    title_separator: str = "｜"
    site_description: str = "Columns and news from Kokuban BASE."
    columns_dir: Path = Path("columns")
    template_path: Path = Path("columns/template.html")
    summary_path: Path = Path("columns/index.json")
    sitemap_path: Path = Path("sitemap.xml")
    rss_path: Path = Path("rss.xml")
    enable_rss: bool = False
    feed_limit: int = 20
    endpoint: str = "news"
    page_size: int = 50
    request_timeout: Optional[float] = 30
    static_pages: tuple = STATIC_PAGES
    default_og_image: str = "ogp.jpg"
    utc_offset_hours: float = 9
    description_length: int = 120
    service_domain: str = field(default="", repr=False)
    api_key: str = field(default="", repr=False)

    def __post_init__(self) -> None:
        self.base_url = self.base_url.rstrip("/")
        for name in ("columns_dir", "template_path", "summary_path", "sitemap_path", "rss_path"):
            setattr(self, name, Path(getattr(self, name)))
        if isinstance(self.static_pages, str):
            self.static_pages = (self.static_pages,)
        self.static_pages = tuple(self.static_pages)

    def resolve_paths(self, root: Path) -> "SiteConfig":
        for name in ("columns_dir", "template_path", "summary_path", "sitemap_path", "rss_path"):
            value = getattr(self, name)
            if not value.is_absolute():
                setattr(self, name, (root / value).resolve())
        return self

    def article_dir(self, slug: str) -> Path:
        return self.columns_dir / slug

    def article_url(self, slug: str) -> str:
        return f"{self.base_url}/columns/{slug}/"


def load_config(path: Path) -> dict:
    if not path.exists():
        return {}
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix == ".toml":
        try:
            data = toml.loads(text)
        except toml.TOMLDecodeError as exc:
            print(f"Invalid TOML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
    elif suffix in {".yml", ".yaml"}:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            print(f"Invalid YAML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
        if data is None:
            return {}
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            print(f"Invalid JSON in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
    if not isinstance(data, dict):
        print(f"Config file must be a mapping: {path}", file=sys.stderr)
        sys.exit(1)
    return data


def load_credentials(env_file: Optional[Path] = None) -> tuple[str, str]:
    """Return (service_domain, api_key), exiting with status 1 if either is unset."""
    load_dotenv(dotenv_path=env_file or Path.cwd() / ".env", override=False)
    service_domain = os.getenv(SERVICE_DOMAIN_ENV, "").strip()
    api_key = os.getenv(API_KEY_ENV, "").strip()
    if not service_domain or not api_key:
        print(
            f"Error: environment variables {SERVICE_DOMAIN_ENV} and {API_KEY_ENV} must be set.",
            file=sys.stderr,
        )
        sys.exit(1)
    return service_domain, api_key
