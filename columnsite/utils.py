from __future__ import annotations

import datetime as dt
from typing import Optional
from urllib.parse import quote

# encodeURIComponent leaves these unescaped
URI_COMPONENT_SAFE = "-_.!~*'()"


def parse_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y", "on"}
    return False


def parse_int(value: object, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return default


def join_url(base: str, path: str) -> str:
    base = base.rstrip("/")
    path = path.lstrip("/")
    if not path:
        return base
    return f"{base}/{path}"


def encode_component(value: str) -> str:
    return quote(value, safe=URI_COMPONENT_SAFE)


def parse_timestamp(value: object) -> Optional[dt.datetime]:
    """Parse an API timestamp such as ``2024-01-10T03:00:00.000Z``.

    Naive values are taken as UTC. Empty input returns None; anything
    unparseable raises ValueError.
    """
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        parsed = value
    else:
        text = str(value).strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        parsed = dt.datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    return parsed


def to_utc(value: dt.datetime) -> dt.datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value.astimezone(dt.timezone.utc)


def iso_timestamp(value: dt.datetime) -> str:
    value = to_utc(value)
    return f"{value:%Y-%m-%dT%H:%M:%S}.{value.microsecond // 1000:03d}Z"


def iso_day(value: dt.datetime) -> str:
    return to_utc(value).date().isoformat()


def format_long_date(value: dt.datetime, utc_offset_hours: float = 9) -> str:
    local = to_utc(value).astimezone(dt.timezone(dt.timedelta(hours=utc_offset_hours)))
    return f"{local.year}年{local.month}月{local.day}日"


def rfc822_date(value: dt.datetime) -> str:
    return to_utc(value).strftime("%a, %d %b %Y %H:%M:%S %z")
