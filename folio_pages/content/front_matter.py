r"""Split content files into front matter and body and validate the metadata.

Content files open with a metadata block fenced either by ``---`` (YAML) or
``+++`` (TOML)::

    ---
    title: Hello
    date: 2024-05-01
    tags: [rust, python]
    ---
    Body in markdown.

Example
-------
>>> from pathlib import Path
>>> meta, body = parse_content("---\ntitle: Hi\n---\nBody\n", Path("hi.md"))
>>> meta.title, body
('Hi', 'Body\n')
"""

from __future__ import annotations

import io
import re
import tomllib
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from folio_pages.config.helpers import _optional_str, _parse_timestamp
from folio_pages.errors import ContentError

from .models import FrontMatter, slugify

if typ.TYPE_CHECKING:
    from pathlib import Path

FRONT_MATTER_PATTERN = re.compile(
    r"\A\ufeff?(?P<fence>---|\+\+\+)[ \t]*\r?\n"
    r"(?P<meta>.*?)"
    r"^(?P=fence)[ \t]*(?:\r?\n|\Z)"
    r"(?P<body>.*)\Z",
    re.DOTALL | re.MULTILINE,
)
KNOWN_KEYS = frozenset(
    {
        "title",
        "description",
        "date",
        "slug",
        "url",
        "category",
        "tags",
        "template",
        "draft",
        "extra",
    }
)


def split_front_matter(text: str, path: Path) -> tuple[str, str, str]:
    """Return ``(fence, raw_metadata, body)`` for the content of ``path``."""
    match = FRONT_MATTER_PATTERN.match(text)
    if match is None:
        msg = "content does not start with a '---' or '+++' front matter block"
        raise ContentError(path, msg)
    return match.group("fence"), match.group("meta"), match.group("body")


def parse_content(
    text: str, path: Path, *, require_title: bool = True
) -> tuple[FrontMatter, str]:
    """Parse a content file into validated front matter and its markdown body.

    Parameters
    ----------
    text : str
        Full text of the content file.
    path : Path
        Source location, used in error messages.
    require_title : bool, optional
        Pages must declare a ``title``; section indexes may omit it.

    Returns
    -------
    tuple[FrontMatter, str]
        The metadata record and the remaining markdown.

    Raises
    ------
    ContentError
        If the front matter block is absent or malformed, or a field is
        missing or has the wrong type.
    """
    fence, raw_meta, body = split_front_matter(text, path)
    payload = _load_metadata(fence, raw_meta, path)
    return _build_front_matter(payload, path, require_title=require_title), body


def _load_metadata(fence: str, raw_meta: str, path: Path) -> dict[str, typ.Any]:
    try:
        if fence == "+++":
            loaded: object = tomllib.loads(raw_meta)
        else:
            loader = YAML(typ="safe")
            loader.version = (1, 2)
            loaded = loader.load(io.StringIO(raw_meta)) or {}
    except (YAMLError, tomllib.TOMLDecodeError) as exc:
        raise ContentError(path, f"malformed front matter: {exc}") from exc
    if not isinstance(loaded, dict):
        raise ContentError(path, "front matter must be a mapping")
    return dict(loaded)


def _build_front_matter(
    payload: typ.Mapping[str, typ.Any], path: Path, *, require_title: bool
) -> FrontMatter:
    title = _optional_str(payload.get("title"))
    if title is None and require_title:
        raise ContentError(path, "missing required front matter field 'title'")

    raw_date = payload.get("date")
    try:
        date = _parse_timestamp(raw_date)
    except ValueError as exc:
        raise ContentError(path, f"invalid date {raw_date!r}") from exc
    if raw_date is not None and date is None:
        raise ContentError(path, f"invalid date {raw_date!r}")

    draft = payload.get("draft", False)
    if not isinstance(draft, bool):
        raise ContentError(path, "'draft' must be a boolean")

    raw_extra = payload.get("extra") or {}
    if not isinstance(raw_extra, dict):
        raise ContentError(path, "'extra' must be a mapping")
    extra = dict(raw_extra)
    for key, value in payload.items():
        if key not in KNOWN_KEYS:
            extra.setdefault(key, value)

    return FrontMatter(
        title=title or "",
        description=_optional_str(payload.get("description")),
        date=date,
        slug=_optional_str(payload.get("slug")),
        url=_optional_str(payload.get("url")),
        category=_listing_name(
            _expect_str(payload, "category", path), "category", path
        ),
        tags=_parse_tags(payload.get("tags"), path),
        template=_expect_str(payload, "template", path),
        draft=draft,
        extra=extra,
    )


def _expect_str(payload: typ.Mapping[str, typ.Any], key: str, path: Path) -> str | None:
    """Return the optional string under ``key``; other scalar types are rejected."""
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ContentError(path, f"'{key}' must be a string")
    return value.strip() or None


def _listing_name(name: str | None, kind: str, path: Path) -> str | None:
    """Reject tag and category names that produce an empty URL slug."""
    if name is not None and not slugify(name):
        raise ContentError(path, f"{kind} {name!r} has no characters usable in a URL")
    return name


def _parse_tags(value: object, path: Path) -> tuple[str, ...]:
    """Return tags as an ordered tuple without duplicates."""
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ContentError(path, "'tags' must be a list of strings")
    tags: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ContentError(path, "'tags' must be a list of strings")
        tag = item.strip()
        if not tag:
            continue
        _listing_name(tag, "tag", path)
        if tag not in tags:
            tags.append(tag)
    return tuple(tags)


__all__ = ["FRONT_MATTER_PATTERN", "parse_content", "split_front_matter"]
