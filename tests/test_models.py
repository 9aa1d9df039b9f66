"""Tests for the page ordering and identity rules."""

from __future__ import annotations

import datetime as dt
from pathlib import Path

from folio_pages.content import FrontMatter, Page, slugify, sort_pages


def _page(name: str, title: str, date: dt.datetime | None = None) -> Page:
    return Page(
        file_path=Path("content") / f"{name}.md",
        parent_path=Path("content"),
        relative_path=f"{name}.md",
        meta=FrontMatter(title=title, date=date),
        raw_content="",
        content="",
        summary=None,
        slug=name,
        url=name,
        permalink=f"https://example.com/{name}/",
    )


def _at(day: int) -> dt.datetime:
    return dt.datetime(2024, 1, day, tzinfo=dt.UTC)


def test_dated_pages_sort_by_descending_date() -> None:
    older = _page("older", "Z", _at(1))
    newer = _page("newer", "A", _at(9))
    assert sort_pages([older, newer]) == [newer, older]
    assert newer.sort_key() < older.sort_key()


def test_undated_pages_sort_after_dated_regardless_of_title() -> None:
    undated = _page("undated", "AAA")
    dated = _page("dated", "ZZZ", _at(1))
    assert sort_pages([undated, dated]) == [dated, undated]


def test_equal_dates_fall_back_to_title() -> None:
    beta = _page("b", "Beta", _at(3))
    alpha = _page("a", "Alpha", _at(3))
    assert [p.title for p in sort_pages([beta, alpha])] == ["Alpha", "Beta"]


def test_ordering_is_irreflexive() -> None:
    page = _page("p", "P", _at(2))
    assert not page.sort_key() < page.sort_key()


def test_identity_is_file_path() -> None:
    first = _page("same", "One", _at(1))
    second = _page("same", "Two")
    assert first == second
    assert len({first, second}) == 1


def test_slugify() -> None:
    assert slugify("Hello, World!") == "hello-world"
    assert slugify("snake_case name") == "snake-case-name"
