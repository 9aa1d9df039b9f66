"""Derive tag and category memberships from loaded pages.

The indices map a tag or category name to the set of page identities
(``file_path``) carrying it. They are rebuilt from scratch on every parse.
Pages are visited in sorted path order so that key insertion order, and
therefore the tie-break of :func:`sorted_items`, is reproducible.

Examples
--------
>>> tags, categories = build_indices([])
>>> tags, categories
({}, {})
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

from folio_pages.content.models import slugify

if typ.TYPE_CHECKING:
    from pathlib import Path

    from folio_pages.content.models import Page

PageIndex = dict[str, set["Path"]]


def item_slug(name: str) -> str:
    """Return the URL slug used for a tag or category named ``name``.

    Raises
    ------
    ValueError
        If ``name`` has no characters a slug can keep. The front matter parser
        rejects such names, so this only guards direct callers.
    """
    slug = slugify(name)
    if not slug:
        msg = f"cannot derive a slug from {name!r}"
        raise ValueError(msg)
    return slug


class ListKind(enum.Enum):
    """The two kinds of listing pages rendered from the indices."""

    TAGS = "tags"
    CATEGORIES = "categories"

    @property
    def list_template(self) -> str:
        """Template for the overview listing every item."""
        return f"{self.value}.html"

    @property
    def single_template(self) -> str:
        """Template for the detail page of a single item."""
        return f"{self.var_name}.html"

    @property
    def var_name(self) -> str:
        """Context variable holding the item name on detail pages."""
        return "tag" if self is ListKind.TAGS else "category"

    @property
    def output_dir(self) -> str:
        """Directory below the output root holding this kind's listings."""
        return self.value


@dc.dataclass(slots=True, frozen=True)
class ListItem:
    """A tag or category with its page count, as shown on overview pages."""

    name: str
    slug: str
    count: int

    @classmethod
    def from_name(cls, name: str, count: int) -> ListItem:
        return cls(name=name, slug=item_slug(name), count=count)


def build_indices(pages: typ.Iterable[Page]) -> tuple[PageIndex, PageIndex]:
    """Return ``(tag_index, category_index)`` built in a single pass.

    Parameters
    ----------
    pages : Iterable[Page]
        Every loaded page.

    Returns
    -------
    tuple[dict[str, set[Path]], dict[str, set[Path]]]
        Tag and category names mapped to the ``file_path`` of each page that
        declares them. Pages without a category never appear in the category
        index.
    """
    tags: PageIndex = {}
    categories: PageIndex = {}
    for page in sorted(pages, key=lambda item: item.file_path):
        if page.meta.category:
            categories.setdefault(page.meta.category, set()).add(page.file_path)
        for tag in page.meta.tags:
            tags.setdefault(tag, set()).add(page.file_path)
    return tags, categories


def sorted_items(index: typ.Mapping[str, typ.Collection[Path]]) -> list[ListItem]:
    """Return listing items ordered by descending page count.

    Items with equal counts keep the key order of ``index``.

    Examples
    --------
    >>> from pathlib import Path
    >>> index = {"a": {Path("x")}, "b": {Path("x"), Path("y")}, "c": {Path("z")}}
    >>> [item.name for item in sorted_items(index)]
    ['b', 'a', 'c']
    """
    items = [ListItem.from_name(name, len(paths)) for name, paths in index.items()]
    return sorted(items, key=lambda item: -item.count)


__all__ = ["ListItem", "ListKind", "PageIndex", "build_indices", "item_slug", "sorted_items"]
