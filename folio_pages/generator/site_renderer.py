"""Render the document graph into output documents.

:class:`SiteRenderer` turns pages, sections and the tag/category indices into
HTML and XML documents written through an
:class:`~folio_pages.output.OutputWriter`. Each ``render_*`` method is an
independent step: it either writes all of its documents or raises the first
:class:`~folio_pages.errors.TemplateRenderError` /
:class:`~folio_pages.errors.OutputError` it hits, leaving output from earlier
steps in place.
"""

from __future__ import annotations

import logging
import typing as typ

from folio_pages._constants import (
    FEED_FILENAME,
    FEED_LIMIT,
    FEED_TEMPLATE,
    INDEX_TEMPLATE,
    LIVE_RELOAD_SNIPPET,
    OUTPUT_INDEX_FILENAME,
    PAGE_TEMPLATE,
    SECTION_TEMPLATE,
    SITEMAP_FILENAME,
    SITEMAP_TEMPLATE,
)
from folio_pages.content.models import sort_pages
from folio_pages.indices import ListKind, item_slug, sorted_items

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from folio_pages.config import SiteConfig
    from folio_pages.content.models import Page, Section
    from folio_pages.output import OutputWriter

    from .templates import TemplateSet

logger = logging.getLogger("folio_pages.render")


class SiteRenderer:
    """Render pages, sections, listings, the index, the sitemap and the feed."""

    def __init__(
        self,
        config: SiteConfig,
        templates: TemplateSet,
        writer: OutputWriter,
        *,
        live_reload: bool = False,
    ) -> None:
        """Initialize the renderer.

        Parameters
        ----------
        config : SiteConfig
            Site configuration exposed to templates as ``config``.
        templates : TemplateSet
            Loaded templates, including the built-in sitemap and feed.
        writer : OutputWriter
            Destination for every rendered document.
        live_reload : bool, optional
            Inject the live-reload script into every HTML document.
        """
        self.config = config
        self.templates = templates
        self.writer = writer
        self.live_reload = live_reload

    @property
    def output_path(self) -> Path:
        return self.writer.output_path

    def inject_livereload(self, html: str) -> str:
        """Insert the live-reload script before ``</body>`` when enabled."""
        if not self.live_reload:
            return html
        return html.replace("</body>", f"{LIVE_RELOAD_SNIPPET}</body>", 1)

    def render_pages(self, pages: cabc.Iterable[Page]) -> list[Path]:
        """Render every page to ``<output>/<url>/index.html`` and copy its assets."""
        written: list[Path] = []
        for page in sorted(pages, key=lambda item: item.file_path):
            directory = self.output_path.joinpath(*_segments(page.url))
            self.writer.create_directory(directory)
            context = {
                "page": page,
                "config": self.config,
                "current_url": page.permalink,
                "current_path": _current_path(page.url),
            }
            html = self.templates.render(page.meta.template or PAGE_TEMPLATE, context)
            written.append(
                self.writer.create_file(
                    directory / OUTPUT_INDEX_FILENAME, self.inject_livereload(html)
                )
            )
            for asset in page.assets:
                self.writer.copy_file(asset, directory / asset.name)
        logger.info("Rendered %d page(s)", len(written))
        return written

    def render_sections(
        self, sections: cabc.Mapping[Path, Section]
    ) -> list[Path]:
        """Render every section to ``<output>/<components>/index.html``."""
        written: list[Path] = []
        for key in sorted(sections):
            section = sections[key]
            directory = self.output_path.joinpath(*section.components)
            self.writer.create_directory(directory)
            context = {
                "section": section,
                "pages": section.pages,
                "subsections": [sections[child] for child in section.subsections],
                "config": self.config,
                "current_url": section.permalink,
                "current_path": _current_path(section.url),
            }
            template = section.meta.template or SECTION_TEMPLATE
            html = self.templates.render(template, context)
            written.append(
                self.writer.create_file(
                    directory / OUTPUT_INDEX_FILENAME, self.inject_livereload(html)
                )
            )
        logger.info("Rendered %d section(s)", len(written))
        return written

    def render_categories_and_tags(
        self,
        kind: ListKind,
        index: cabc.Mapping[str, cabc.Collection[Path]],
        pages: cabc.Mapping[Path, Page],
    ) -> list[Path]:
        """Render the overview page and one detail page per tag or category.

        Nothing is written when ``index`` is empty.
        """
        if not index:
            logger.debug("No %s to render", kind.value)
            return []

        base_dir = self.writer.create_directory(self.output_path / kind.output_dir)
        written: list[Path] = []

        overview_context = {kind.value: sorted_items(index), "config": self.config}
        overview = self.templates.render(kind.list_template, overview_context)
        written.append(
            self.writer.create_file(
                base_dir / OUTPUT_INDEX_FILENAME, self.inject_livereload(overview)
            )
        )

        for name, members in index.items():
            slug = item_slug(name)
            member_pages = sort_pages(pages[path] for path in members if path in pages)
            context = {
                kind.var_name: name,
                f"{kind.var_name}_slug": slug,
                "pages": member_pages,
                "config": self.config,
            }
            html = self.templates.render(kind.single_template, context)
            written.append(
                self.writer.create_file(
                    base_dir / slug / OUTPUT_INDEX_FILENAME,
                    self.inject_livereload(html),
                )
            )
        logger.info("Rendered %d %s listing page(s)", len(written), kind.value)
        return written

    def render_index(self, pages: cabc.Iterable[Page]) -> Path:
        """Render every page, newest first, through ``index.html``."""
        context = {"pages": sort_pages(pages), "config": self.config}
        html = self.templates.render(INDEX_TEMPLATE, context)
        return self.writer.create_file(
            self.output_path / OUTPUT_INDEX_FILENAME, self.inject_livereload(html)
        )

    def render_sitemap(
        self,
        pages: cabc.Iterable[Page],
        sections: cabc.Mapping[Path, Section],
        tags: cabc.Mapping[str, cabc.Collection[Path]],
        categories: cabc.Mapping[str, cabc.Collection[Path]],
    ) -> Path:
        """Render ``sitemap.xml`` listing every page, section and listing URL."""
        context = {
            "pages": sorted(pages, key=lambda page: page.permalink),
            "sections": [sections[key] for key in sorted(sections)],
            "categories": self._listing_permalinks(
                ListKind.CATEGORIES,
                categories,
                enabled=self.config.generate_categories_pages,
            ),
            "tags": self._listing_permalinks(
                ListKind.TAGS, tags, enabled=self.config.generate_tags_pages
            ),
            "config": self.config,
        }
        sitemap = self.templates.render(SITEMAP_TEMPLATE, context)
        return self.writer.create_file(self.output_path / SITEMAP_FILENAME, sitemap)

    def render_feed(self, pages: cabc.Iterable[Page]) -> Path | None:
        """Render the feed with the most recent dated pages.

        Returns
        -------
        Path | None
            Path of the written feed, or ``None`` when no page has a date.
        """
        dated = sort_pages(page for page in pages if page.date is not None)
        if not dated:
            logger.info("No dated pages; skipping feed")
            return None

        recent = dated[:FEED_LIMIT]
        context = {
            "pages": recent,
            "last_build_date": recent[0].date,
            "feed_url": self.config.feed_url,
            "config": self.config,
        }
        feed = self.templates.render(FEED_TEMPLATE, context)
        return self.writer.create_file(self.output_path / FEED_FILENAME, feed)

    def _listing_permalinks(
        self,
        kind: ListKind,
        index: cabc.Mapping[str, cabc.Collection[Path]],
        *,
        enabled: bool,
    ) -> list[str]:
        if not enabled or not index:
            return []
        permalinks = [self.config.make_permalink(kind.output_dir)]
        permalinks.extend(
            self.config.make_permalink(f"{kind.output_dir}/{item_slug(name)}")
            for name in sorted(index)
        )
        return permalinks


def _segments(url: str) -> list[str]:
    return [segment for segment in url.split("/") if segment]


def _current_path(url: str) -> str:
    trimmed = url.strip("/")
    return f"/{trimmed}/" if trimmed else "/"


__all__ = ["SiteRenderer"]
