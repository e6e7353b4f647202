from __future__ import annotations

import re
from pathlib import Path
from typing import Optional

# quoted attribute values may contain ">"
TAG_RE = re.compile(r"""<(?:"[^"]*"|'[^']*'|[^'">])*>""")
SPACE_RE = re.compile(r"\s+")
ELLIPSIS = "..."
HTML_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#39;",
    }
)
TOKEN_RE = re.compile(r"\{\{(\w+)\}\}")


def strip_tags(html_text: str) -> str:
    return TAG_RE.sub("", html_text)


def extract_description(html_text: Optional[str], max_length: int = 120) -> str:
    if not html_text:
        return ""
    text = SPACE_RE.sub(" ", strip_tags(html_text)).strip()
    if len(text) > max_length:
        return text[:max_length] + ELLIPSIS
    return text


def escape_html(text: Optional[str]) -> str:
    if not text:
        return ""
    return str(text).translate(HTML_ESCAPES)


def render_template(template: str, **context: str) -> str:
    """Replace every ``{{NAME}}`` occurrence with ``context[NAME]``.

    The template is scanned once, so token text inside a substituted value
    is left as is. Tokens without a value are left in place.
    """
    return TOKEN_RE.sub(lambda match: context.get(match.group(1), match.group(0)), template)


def read_template(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
