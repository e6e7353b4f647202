from __future__ import annotations

import pytest

from columnsite.config import SiteConfig
from support import TEMPLATE


@pytest.fixture
def site_config(tmp_path):
    columns = tmp_path / "columns"
    columns.mkdir()
    (columns / "template.html").write_text(TEMPLATE, encoding="utf-8")
    return SiteConfig(
        columns_dir=columns,
        template_path=columns / "template.html",
        summary_path=columns / "index.json",
        sitemap_path=tmp_path / "sitemap.xml",
        rss_path=tmp_path / "rss.xml",
    )
