from __future__ import annotations

from typing import Optional

from .render import escape_html
from .utils import join_url

EYECATCH_WIDTH = 1200
EYECATCH_HEIGHT = 675
EYECATCH_QUALITY = 80
OG_IMAGE_WIDTH = 1200
OG_IMAGE_HEIGHT = 630
EYECATCH_CLASSES = "w-full h-auto object-cover rounded-lg mb-8 shadow-md"


def image_url(image: Optional[dict]) -> Optional[str]:
    if not image:
        return None
    return image.get("url") or None


def crop_url(url: str, width: int, height: int, quality: Optional[int] = None) -> str:
    query = f"fit=crop&w={width}&h={height}"
    if quality is not None:
        query += f"&q={quality}"
    return f"{url}?{query}"


def create_eyecatch_html(image: Optional[dict], alt: Optional[str]) -> str:
    url = image_url(image)
    if not url:
        return ""
    # explicit size reserves the layout box before the image loads
    width = image.get("width") or EYECATCH_WIDTH
    height = image.get("height") or EYECATCH_HEIGHT
    src = crop_url(url, EYECATCH_WIDTH, EYECATCH_HEIGHT, EYECATCH_QUALITY)
    return (
        f'<img src="{src}" alt="{escape_html(alt)}" width="{width}" height="{height}" '
        f'class="{EYECATCH_CLASSES}" loading="eager" fetchpriority="high">'
    )


def og_image_url(image: Optional[dict], base_url: str, default_path: str) -> str:
    url = image_url(image)
    if url:
        return crop_url(url, OG_IMAGE_WIDTH, OG_IMAGE_HEIGHT)
    return join_url(base_url, default_path)
