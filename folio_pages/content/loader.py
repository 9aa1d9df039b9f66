"""Discover content files and assemble pages and the section tree.

:func:`load` walks ``<root>/content`` for markdown files. Each ``_index.md``
becomes a :class:`~folio_pages.content.models.Section` keyed by the directory
it lives in; every other file becomes a
:class:`~folio_pages.content.models.Page`, linked into the section of its
parent directory when one exists. Sections are then attached to the section
of their own parent directory and each section's pages are sorted newest
first.

Example
-------
>>> from pathlib import Path
>>> from folio_pages.config import load_site_config
>>> from folio_pages.generator import MarkdownRenderer
>>> config = load_site_config(Path("my-site"))  # doctest: +SKIP
>>> pages, sections = load(Path("my-site"), config, MarkdownRenderer())  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from collections import defaultdict
from pathlib import Path

from folio_pages._constants import (
    CONTENT_DIRNAME,
    CONTENT_EXTENSION,
    PAGE_BUNDLE_STEM,
    SECTION_INDEX_FILENAME,
    SUMMARY_SEPARATOR,
)
from folio_pages.errors import ContentError

from .front_matter import parse_content
from .models import Page, Section, slugify, sort_pages

if typ.TYPE_CHECKING:
    from folio_pages.config import SiteConfig
    from folio_pages.generator.renderer import MarkdownRenderer

logger = logging.getLogger("folio_pages.content")


def load(
    root: Path, config: SiteConfig, renderer: MarkdownRenderer
) -> tuple[dict[Path, Page], dict[Path, Section]]:
    """Load every content file under ``root/content``.

    Parameters
    ----------
    root : Path
        Site root containing the ``content`` directory.
    config : SiteConfig
        Site configuration used to build permalinks.
    renderer : MarkdownRenderer
        Renderer turning markdown bodies into HTML.

    Returns
    -------
    tuple[dict[Path, Page], dict[Path, Section]]
        Pages keyed by source path and sections keyed by the directory they
        represent, the latter in sorted key order.

    Raises
    ------
    ContentError
        If any content file cannot be read or parsed. Nothing is returned for
        a partially loaded tree.
    """
    content_dir = root / CONTENT_DIRNAME
    files = _discover(content_dir)
    index_files = [path for path in files if path.name == SECTION_INDEX_FILENAME]
    page_files = [path for path in files if path.name != SECTION_INDEX_FILENAME]

    sections: dict[Path, Section] = {}
    for path in index_files:
        section = _load_section(path, content_dir, config, renderer)
        sections[section.parent_path] = section

    pages: dict[Path, Page] = {}
    for path in page_files:
        page = _load_page(path, content_dir, config, renderer)
        if page is None:
            continue
        owner = sections.get(page.parent_path)
        if owner is not None:
            owner.pages.append(page)
        pages[page.file_path] = page

    _link_subsections(sections)
    for section in sections.values():
        section.pages[:] = sort_pages(section.pages)

    logger.info("Loaded %d page(s) and %d section(s)", len(pages), len(sections))
    return pages, dict(sorted(sections.items()))


def _discover(content_dir: Path) -> list[Path]:
    """Return every content file under ``content_dir`` in a stable order."""
    if not content_dir.is_dir():
        logger.debug("No content directory at %s", content_dir)
        return []
    return sorted(
        path
        for path in content_dir.rglob(f"*{CONTENT_EXTENSION}")
        if path.is_file()
    )


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ContentError(path, f"could not be read: {exc}") from exc


def _relative_parts(directory: Path, content_dir: Path) -> tuple[str, ...]:
    return directory.relative_to(content_dir).parts


def _load_section(
    path: Path, content_dir: Path, config: SiteConfig, renderer: MarkdownRenderer
) -> Section:
    logger.debug("Parsing section %s", path)
    meta, body = parse_content(_read(path), path, require_title=False)
    components = _relative_parts(path.parent, content_dir)
    return Section(
        file_path=path,
        parent_path=path.parent,
        relative_path=path.relative_to(content_dir).as_posix(),
        components=components,
        meta=meta,
        content=renderer.render(body),
        permalink=config.make_permalink("/".join(components)),
    )


def _load_page(
    path: Path, content_dir: Path, config: SiteConfig, renderer: MarkdownRenderer
) -> Page | None:
    """Parse ``path`` into a Page, or return ``None`` for drafts.

    A file named ``index.md`` below the content root is a page bundle: the
    page takes its slug from the enclosing directory, belongs to the section
    above that directory, and carries the directory's other files as assets.
    """
    logger.debug("Parsing page %s", path)
    meta, body = parse_content(_read(path), path)
    if meta.draft:
        logger.debug("Skipping draft %s", path)
        return None

    is_bundle = path.stem == PAGE_BUNDLE_STEM and path.parent != content_dir
    if is_bundle:
        parent_path = path.parent.parent
        default_slug = path.parent.name
        assets = tuple(
            sorted(
                item
                for item in path.parent.iterdir()
                if item.is_file() and item.suffix != CONTENT_EXTENSION
            )
        )
    else:
        parent_path = path.parent
        default_slug = path.stem
        assets = ()

    slug = meta.slug or slugify(default_slug) or default_slug
    _check_segment(slug, "slug", path)
    if meta.url:
        url = meta.url.strip("/")
        if not url:
            raise ContentError(path, f"url {meta.url!r} does not name a page")
        for segment in url.split("/"):
            _check_segment(segment, "url", path)
    else:
        url = "/".join((*_relative_parts(parent_path, content_dir), slug))

    summary = None
    if SUMMARY_SEPARATOR in body:
        summary = renderer.render(body.split(SUMMARY_SEPARATOR, 1)[0])

    return Page(
        file_path=path,
        parent_path=parent_path,
        relative_path=path.relative_to(content_dir).as_posix(),
        meta=meta,
        raw_content=body,
        content=renderer.render(body),
        summary=summary,
        slug=slug,
        url=url,
        permalink=config.make_permalink(url),
        assets=assets,
    )


def _check_segment(segment: str, field: str, path: Path) -> None:
    """Reject output path segments that would leave their directory."""
    if segment in {"", ".", ".."} or "/" in segment or "\\" in segment:
        msg = f"{field} segment {segment!r} is not a valid path part"
        raise ContentError(path, msg)


def _link_subsections(sections: dict[Path, Section]) -> None:
    """Attach every section to the section of its parent directory.

    Children are recorded by key so the section mapping remains the single
    owner of every Section object.
    """
    by_grandparent: dict[Path, list[Path]] = defaultdict(list)
    for key in sorted(sections):
        section = sections[key]
        if section.parent_path.parent == section.parent_path:
            continue
        by_grandparent[section.parent_path.parent].append(key)

    for parent_key, section in sections.items():
        section.subsections[:] = by_grandparent.get(parent_key, [])


__all__ = ["load"]
