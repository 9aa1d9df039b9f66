"""Site controller orchestrating the load, index and render pipeline.

A :class:`Site` owns every long-lived piece of build state: configuration,
templates, the page and section collections, and the tag/category indices.
It moves through three states::

    UNLOADED --parse()--> LOADED --build()--> BUILT

``parse`` may be re-run at any point and fully replaces the previous state.
``build`` always starts by cleaning the output directory, then renders in a
fixed order so that the sitemap and feed see fully populated collections.

Example
-------
>>> from pathlib import Path
>>> from folio_pages.site import Site
>>> site = Site(Path("my-site"))  # doctest: +SKIP
>>> site.parse()  # doctest: +SKIP
>>> site.build()  # doctest: +SKIP
"""

from __future__ import annotations

import enum
import logging
import typing as typ
from pathlib import Path

from ._constants import DEFAULT_OUTPUT_DIRNAME, TEMPLATES_DIRNAME
from .config import SiteConfig, load_site_config
from .content import load
from .errors import SiteStateError
from .generator import MarkdownRenderer, SiteRenderer, TemplateSet
from .indices import ListKind, PageIndex, build_indices
from .output import OutputWriter

if typ.TYPE_CHECKING:
    from .content import Page, Section

logger = logging.getLogger("folio_pages.site")


class SiteState(enum.Enum):
    """Lifecycle of a :class:`Site`."""

    UNLOADED = "unloaded"
    LOADED = "loaded"
    BUILT = "built"


class Site:
    """A content tree together with the configuration and templates to build it."""

    def __init__(self, path: Path) -> None:
        """Load the configuration and templates of the site at ``path``.

        Content is not read until :meth:`parse` is called.

        Parameters
        ----------
        path : Path
            Site root containing the configuration file, ``content/``,
            ``templates/`` and optionally ``static/``.

        Raises
        ------
        SiteConfigError
            If the configuration is missing or invalid.
        TemplateRenderError
            If a template fails to compile.
        """
        self.base_path = path
        self.config: SiteConfig = load_site_config(path)
        self.markdown = MarkdownRenderer(
            highlight_code=self.config.highlight_code,
            pygments_style=self.config.pygments_style,
        )
        self.templates = TemplateSet(
            path / TEMPLATES_DIRNAME,
            template_globals={"pygments_css": self.markdown.stylesheet},
        )
        self.writer = OutputWriter(path / DEFAULT_OUTPUT_DIRNAME)
        self.live_reload = False
        self.pages: dict[Path, Page] = {}
        self.sections: dict[Path, Section] = {}
        self.tags: PageIndex = {}
        self.categories: PageIndex = {}
        self.state = SiteState.UNLOADED

    @classmethod
    def new(cls, path: Path) -> Site:
        """Alias for the constructor, mirroring the other lifecycle verbs."""
        return cls(path)

    @property
    def output_path(self) -> Path:
        return self.writer.output_path

    def enable_live_reload(self) -> None:
        """Inject the live-reload script into every HTML document from now on."""
        self.live_reload = True

    def set_output_path(self, path: Path) -> None:
        """Write output to ``path`` instead of ``<root>/public``."""
        self.writer = OutputWriter(path)

    @property
    def renderer(self) -> SiteRenderer:
        return SiteRenderer(
            self.config, self.templates, self.writer, live_reload=self.live_reload
        )

    def parse(self) -> None:
        """Load all content and rebuild the tag and category indices.

        Raises
        ------
        ContentError
            If any content file is invalid; the previous state is kept.
        """
        pages, sections = load(self.base_path, self.config, self.markdown)
        tags, categories = build_indices(pages.values())
        self.pages = pages
        self.sections = sections
        self.tags = tags
        self.categories = categories
        self.state = SiteState.LOADED
        logger.info(
            "Parsed %d page(s), %d section(s), %d tag(s) and %d categories",
            len(pages),
            len(sections),
            len(tags),
            len(categories),
        )

    def build(self) -> None:
        """Regenerate the whole output directory.

        Raises
        ------
        SiteStateError
            If :meth:`parse` has not run yet.
        """
        if self.state is SiteState.UNLOADED:
            msg = "Site content must be parsed before building."
            raise SiteStateError(msg)

        self.clean()
        self.build_pages()
        self.render_sitemap()
        if self.config.generate_rss:
            self.render_feed()
        self.render_sections()
        self.copy_static_directory()
        self.state = SiteState.BUILT
        logger.info("Built site into %s", self.output_path)

    def build_pages(self) -> None:
        """Render pages, the enabled listing pages and the site index."""
        self.writer.create_directory(self.output_path)
        self.render_pages()
        if self.config.generate_categories_pages:
            self.render_categories_and_tags(ListKind.CATEGORIES)
        if self.config.generate_tags_pages:
            self.render_categories_and_tags(ListKind.TAGS)
        self.render_index()

    def rebuild_after_content_change(self) -> None:
        """Re-read all content and rebuild everything."""
        self.parse()
        self.build()

    def rebuild_after_template_change(self) -> None:
        """Reload templates from disk and re-render the pages only."""
        self.templates.reload()
        self.render_pages()

    def clean(self) -> None:
        self.writer.clean()

    def copy_static_directory(self) -> list[Path]:
        return self.writer.copy_static(self.base_path)

    def render_pages(self) -> list[Path]:
        return self.renderer.render_pages(self.pages.values())

    def render_sections(self) -> list[Path]:
        return self.renderer.render_sections(self.sections)

    def render_categories_and_tags(self, kind: ListKind) -> list[Path]:
        index = self.tags if kind is ListKind.TAGS else self.categories
        return self.renderer.render_categories_and_tags(kind, index, self.pages)

    def render_index(self) -> Path:
        return self.renderer.render_index(self.pages.values())

    def render_sitemap(self) -> Path:
        return self.renderer.render_sitemap(
            self.pages.values(), self.sections, self.tags, self.categories
        )

    def render_feed(self) -> Path | None:
        return self.renderer.render_feed(self.pages.values())


__all__ = ["Site", "SiteState"]
