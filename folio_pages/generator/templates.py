"""Jinja template set with the built-in sitemap and feed templates.

User templates live in ``<root>/templates``. The sitemap and feed templates
ship inline in :data:`BUILTIN_TEMPLATES` and are only used when the site does
not provide a template of the same name.
"""

from __future__ import annotations

import datetime as dt
import logging
import types
import typing as typ

from jinja2 import (
    ChoiceLoader,
    DictLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
    select_autoescape,
)

from folio_pages._constants import FEED_TEMPLATE, SITEMAP_TEMPLATE
from folio_pages.errors import TemplateRenderError

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger("folio_pages.templates")

RFC822_FORMAT = "%a, %d %b %Y %H:%M:%S %z"
TEMPLATE_EXTENSIONS = ("html", "xml", "txt", "jinja")

RSS_XML = """\
<?xml version="1.0" encoding="UTF-8"?>
<rss xmlns:atom="http://www.w3.org/2005/Atom" version="2.0">
  <channel>
    <title>{{ config.title }}</title>
    <link>{{ config.base_url }}</link>
    <description>{{ config.description }}</description>
    <generator>folio</generator>
    <language>{{ config.language_code }}</language>
    <atom:link href="{{ feed_url }}" rel="self" type="application/rss+xml"/>
    <lastBuildDate>{{ last_build_date | date }}</lastBuildDate>
    {% for page in pages %}
    <item>
      <title>{{ page.title }}</title>
      <pubDate>{{ page.date | date }}</pubDate>
      <link>{{ page.permalink }}</link>
      <guid>{{ page.permalink }}</guid>
      <description>{% if page.summary %}{{ page.summary }}{% else %}{{ page.content }}{% endif %}</description>
    </item>
    {% endfor %}
  </channel>
</rss>
"""

SITEMAP_XML = """\
<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
  {% for page in pages %}
  <url>
    <loc>{{ page.permalink }}</loc>
    {% if page.date %}
    <lastmod>{{ page.date | date("%Y-%m-%d") }}</lastmod>
    {% endif %}
  </url>
  {% endfor %}
  {% for section in sections %}
  <url>
    <loc>{{ section.permalink }}</loc>
  </url>
  {% endfor %}
  {% for category in categories %}
  <url>
    <loc>{{ category }}</loc>
  </url>
  {% endfor %}
  {% for tag in tags %}
  <url>
    <loc>{{ tag }}</loc>
  </url>
  {% endfor %}
</urlset>
"""

BUILTIN_TEMPLATES: typ.Final[typ.Mapping[str, str]] = types.MappingProxyType(
    {FEED_TEMPLATE: RSS_XML, SITEMAP_TEMPLATE: SITEMAP_XML}
)


def format_date(value: dt.datetime | dt.date | None, fmt: str = RFC822_FORMAT) -> str:
    """Jinja filter formatting ``value`` with ``strftime``; ``None`` becomes ``""``."""
    if value is None:
        return ""
    return value.strftime(fmt)


class TemplateSet:
    """Load and render the site's templates.

    Parameters
    ----------
    templates_dir : Path
        Directory holding the site's Jinja templates.
    template_globals : Mapping[str, Any], optional
        Values exposed to every template (for example the Pygments CSS).

    Raises
    ------
    TemplateRenderError
        If any template in ``templates_dir`` fails to compile.
    """

    def __init__(
        self,
        templates_dir: Path,
        *,
        template_globals: typ.Mapping[str, typ.Any] | None = None,
    ) -> None:
        self.templates_dir = templates_dir
        self._globals = dict(template_globals or {})
        self.env = self._build_environment()
        self._compile_all()

    def reload(self) -> None:
        """Discard every cached template and re-read them from disk."""
        logger.debug("Reloading templates from %s", self.templates_dir)
        self.env = self._build_environment()
        self._compile_all()

    def render(self, name: str, context: typ.Mapping[str, typ.Any]) -> str:
        """Render template ``name`` with ``context``.

        Raises
        ------
        TemplateRenderError
            If the template does not exist, or rendering dereferences an
            undefined value or otherwise fails.
        """
        try:
            template = self.env.get_template(name)
            return template.render(**context)
        except TemplateError as exc:
            raise TemplateRenderError(name, str(exc) or type(exc).__name__) from exc

    def _build_environment(self) -> Environment:
        env = Environment(
            loader=ChoiceLoader(
                [
                    FileSystemLoader(str(self.templates_dir)),
                    DictLoader(dict(BUILTIN_TEMPLATES)),
                ]
            ),
            autoescape=select_autoescape(["html", "xml"]),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        env.filters["date"] = format_date
        env.globals.update(self._globals)
        return env

    def _compile_all(self) -> None:
        """Compile every template eagerly so syntax errors surface at load time."""
        for name in self.env.list_templates(extensions=TEMPLATE_EXTENSIONS):
            try:
                self.env.get_template(name)
            except TemplateError as exc:
                raise TemplateRenderError(name, str(exc)) from exc


__all__ = ["BUILTIN_TEMPLATES", "TemplateSet", "format_date"]
