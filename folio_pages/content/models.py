"""Document model shared by the loader, the index builder and the renderer."""

from __future__ import annotations

import dataclasses as dc
import datetime as dt  # noqa: TC003 - used for runtime type metadata
import re
import typing as typ
from pathlib import Path

SLUG_STRIP_PATTERN = re.compile(r"[\W_]+")


def slugify(value: str) -> str:
    """Convert ``value`` into a lowercase hyphen-separated slug.

    Examples
    --------
    >>> slugify("Hello, World!")
    'hello-world'
    >>> slugify("  Rust & Python  ")
    'rust-python'
    """
    return SLUG_STRIP_PATTERN.sub("-", value.casefold()).strip("-")


@dc.dataclass(slots=True, frozen=True)
class FrontMatter:
    """Metadata block parsed from the head of a content file.

    Attributes
    ----------
    title : str
        Document title. Required for pages; sections may leave it empty.
    description : str | None
        Optional short description.
    date : datetime | None
        Publication date normalised to UTC.
    slug : str | None
        Overrides the slug derived from the filename.
    url : str | None
        Overrides the whole output path of a page.
    category : str | None
        Single category the page belongs to.
    tags : tuple[str, ...]
        Ordered, de-duplicated tags.
    template : str | None
        Template name used instead of ``page.html`` / ``section.html``.
    draft : bool
        Drafts are skipped by the loader.
    extra : dict[str, Any]
        Remaining user-defined keys.
    """

    title: str
    description: str | None = None
    date: dt.datetime | None = None
    slug: str | None = None
    url: str | None = None
    category: str | None = None
    tags: tuple[str, ...] = ()
    template: str | None = None
    draft: bool = False
    extra: dict[str, typ.Any] = dc.field(default_factory=dict)


@dc.dataclass(slots=True, frozen=True, eq=False)
class Page:
    """A single leaf content document.

    Pages are created once per source file during a full parse and never
    mutated afterwards. Equality and hashing use ``file_path`` only.
    """

    file_path: Path
    parent_path: Path
    relative_path: str
    meta: FrontMatter
    raw_content: str
    content: str
    summary: str | None
    slug: str
    url: str
    permalink: str
    assets: tuple[Path, ...] = ()

    @property
    def title(self) -> str:
        return self.meta.title

    @property
    def date(self) -> dt.datetime | None:
        return self.meta.date

    @property
    def category(self) -> str | None:
        return self.meta.category

    @property
    def tags(self) -> tuple[str, ...]:
        return self.meta.tags

    def sort_key(self) -> tuple[int, float, str, str]:
        """Return the key ordering pages newest first, undated pages last.

        Dated pages come first, by descending date; undated pages follow.
        Ties fall back to the title and finally the source path so the order
        is total.
        """
        path_key = self.file_path.as_posix()
        if self.meta.date is None:
            return (1, 0.0, self.meta.title, path_key)
        return (0, -self.meta.date.timestamp(), self.meta.title, path_key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Page):
            return NotImplemented
        return self.file_path == other.file_path

    def __hash__(self) -> int:
        return hash(self.file_path)


@dc.dataclass(slots=True, eq=False)
class Section:
    """A content directory represented by its ``_index.md`` file.

    ``pages`` holds the pages owned by the section. ``subsections`` holds the
    ``parent_path`` keys of direct child sections; resolve them through the
    site's section mapping rather than storing copies.
    """

    file_path: Path
    parent_path: Path
    relative_path: str
    components: tuple[str, ...]
    meta: FrontMatter
    content: str
    permalink: str
    pages: list[Page] = dc.field(default_factory=list)
    subsections: list[Path] = dc.field(default_factory=list)

    @property
    def title(self) -> str:
        return self.meta.title

    @property
    def url(self) -> str:
        return "/".join(self.components)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Section):
            return NotImplemented
        return self.file_path == other.file_path

    def __hash__(self) -> int:
        return hash(self.file_path)


def sort_pages(pages: typ.Iterable[Page]) -> list[Page]:
    """Return ``pages`` ordered newest first with undated pages last."""
    return sorted(pages, key=Page.sort_key)


__all__ = ["FrontMatter", "Page", "Section", "slugify", "sort_pages"]
