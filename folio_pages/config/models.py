"""Typed dataclasses describing folio site configuration."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from folio_pages._constants import FEED_FILENAME
from folio_pages.errors import SiteConfigError


@dc.dataclass(slots=True, frozen=True)
class SiteConfig:
    """Site-wide settings resolved from ``config.yaml`` or ``config.toml``.

    Attributes
    ----------
    title : str
        Site title exposed to every template as ``config.title``.
    base_url : str
        Absolute URL the site is served from; used to build permalinks.
    generate_categories_pages : bool
        Whether ``/categories/`` listing pages are rendered.
    generate_tags_pages : bool
        Whether ``/tags/`` listing pages are rendered.
    generate_rss : bool
        Whether the feed document is rendered.
    description : str
        Optional site description used by the feed.
    language_code : str
        Language advertised by the feed.
    highlight_code : bool
        Whether fenced code blocks are highlighted with Pygments.
    pygments_style : str
        Pygments style used when highlighting.
    extra : dict[str, Any]
        Free-form user settings passed through to templates.
    """

    title: str
    base_url: str
    generate_categories_pages: bool
    generate_tags_pages: bool
    generate_rss: bool
    description: str = ""
    language_code: str = "en"
    highlight_code: bool = True
    pygments_style: str = "monokai"
    extra: dict[str, typ.Any] = dc.field(default_factory=dict)

    def make_permalink(self, path: str) -> str:
        """Return the absolute URL for ``path`` relative to ``base_url``.

        The base URL and path are joined with exactly one ``/`` and the result
        always ends with a trailing slash.

        Examples
        --------
        >>> cfg = SiteConfig("t", "https://example.com", False, False, False)
        >>> cfg.make_permalink("tags/rust")
        'https://example.com/tags/rust/'
        >>> cfg.make_permalink("")
        'https://example.com/'
        """
        base = self.base_url.rstrip("/")
        trimmed = path.strip("/")
        if not trimmed:
            return f"{base}/"
        return f"{base}/{trimmed}/"

    @property
    def feed_url(self) -> str:
        """Return the absolute URL of the feed document."""
        if self.base_url.endswith("/"):
            return f"{self.base_url}{FEED_FILENAME}"
        return f"{self.base_url}/{FEED_FILENAME}"


__all__ = ["SiteConfig", "SiteConfigError"]
