"""Utility helpers shared by the folio configuration and content loaders."""

from __future__ import annotations

import datetime as dt
import typing as typ

from folio_pages.errors import SiteConfigError

REQUIRED_TOGGLES = (
    "generate_categories_pages",
    "generate_tags_pages",
    "generate_rss",
)


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _require_str(payload: typ.Mapping[str, typ.Any], key: str) -> str:
    """Return the non-empty string stored under ``key`` or raise."""
    value = _optional_str(payload.get(key))
    if value is None:
        msg = f"Missing required setting '{key}'."
        raise SiteConfigError(msg)
    return value


def _require_bool(payload: typ.Mapping[str, typ.Any], key: str) -> bool:
    """Return the boolean stored under ``key``; absence is a config error."""
    if key not in payload:
        msg = f"Missing required setting '{key}'."
        raise SiteConfigError(msg)
    value = payload[key]
    if not isinstance(value, bool):
        msg = f"Setting '{key}' must be a boolean, got {value!r}."
        raise SiteConfigError(msg)
    return value


def _optional_bool(payload: typ.Mapping[str, typ.Any], key: str, default: bool) -> bool:
    value = payload.get(key, default)
    if not isinstance(value, bool):
        msg = f"Setting '{key}' must be a boolean, got {value!r}."
        raise SiteConfigError(msg)
    return value


def _parse_timestamp(value: dt.datetime | dt.date | str | None) -> dt.datetime | None:
    """Return a timezone-aware UTC datetime parsed from ``value``, or None.

    Dates without a time component resolve to midnight UTC. Raises
    ``ValueError`` when a string cannot be parsed as ISO-8601.
    """
    match value:
        case dt.datetime():
            parsed = value
        case dt.date():
            parsed = dt.datetime(value.year, value.month, value.day)
        case str() as text:
            sanitized = text.strip()
            if not sanitized:
                return None
            if sanitized.endswith("Z"):
                sanitized = sanitized[:-1] + "+00:00"
            parsed = dt.datetime.fromisoformat(sanitized)
        case _:
            return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=dt.UTC)
    return parsed.astimezone(dt.UTC)


__all__ = [
    "REQUIRED_TOGGLES",
    "_optional_bool",
    "_optional_str",
    "_parse_timestamp",
    "_require_bool",
    "_require_str",
]
