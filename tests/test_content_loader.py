"""Tests for content discovery and section tree assembly."""

from __future__ import annotations

import typing as typ

import pytest

from folio_pages.config import load_site_config
from folio_pages.content import load
from folio_pages.errors import ContentError
from folio_pages.generator import MarkdownRenderer

if typ.TYPE_CHECKING:
    from pathlib import Path


def _load(root: Path) -> tuple[dict, dict]:
    config = load_site_config(root)
    return load(root, config, MarkdownRenderer(highlight_code=False))


def test_scenario_tree(scenario_root: Path) -> None:
    pages, sections = _load(scenario_root)
    content = scenario_root / "content"

    assert set(pages) == {content / "post.md", content / "sub" / "child.md"}
    top = sections[content]
    assert [page.title for page in top.pages] == ["Post"]
    assert top.subsections == [content / "sub"]
    assert sections[content / "sub"].components == ("sub",)
    assert [page.title for page in sections[content / "sub"].pages] == ["Child"]


def test_section_pages_are_linked_not_copied(scenario_root: Path) -> None:
    pages, sections = _load(scenario_root)
    content = scenario_root / "content"
    assert sections[content].pages[0] is pages[content / "post.md"]


def test_sections_iterate_in_sorted_key_order(
    site_root: Path, make_content: typ.Callable[..., Path]
) -> None:
    for name in ("zeta", "alpha", "mid"):
        make_content(site_root, f"{name}/_index.md", title=name)
    _pages, sections = _load(site_root)
    assert list(sections) == sorted(sections)


def test_page_urls_and_permalinks(scenario_root: Path) -> None:
    pages, _sections = _load(scenario_root)
    content = scenario_root / "content"
    post = pages[content / "post.md"]
    child = pages[content / "sub" / "child.md"]
    assert post.url == "post"
    assert child.url == "sub/child"
    assert child.permalink == "https://example.com/sub/child/"


def test_slug_and_url_overrides(
    site_root: Path, make_content: typ.Callable[..., Path]
) -> None:
    make_content(site_root, "blog/first.md", title="First", slug="hello-world")
    make_content(site_root, "blog/second.md", title="Second", url="/custom/path/")
    pages, _sections = _load(site_root)
    content = site_root / "content"
    assert pages[content / "blog" / "first.md"].url == "blog/hello-world"
    assert pages[content / "blog" / "second.md"].url == "custom/path"


def test_orphan_page_is_loaded_without_section(
    site_root: Path, make_content: typ.Callable[..., Path]
) -> None:
    make_content(site_root, "_index.md", title="Home")
    orphan = make_content(site_root, "loose/orphan.md", title="Orphan")
    pages, sections = _load(site_root)
    assert orphan in pages
    assert all(orphan not in [p.file_path for p in s.pages] for s in sections.values())


def test_section_pages_sorted_newest_first(
    site_root: Path, make_content: typ.Callable[..., Path]
) -> None:
    make_content(site_root, "_index.md", title="Home")
    make_content(site_root, "a.md", title="Old", date="2020-01-01")
    make_content(site_root, "b.md", title="Undated")
    make_content(site_root, "c.md", title="New", date="2023-06-01")
    _pages, sections = _load(site_root)
    titles = [page.title for page in sections[site_root / "content"].pages]
    assert titles == ["New", "Old", "Undated"]


def test_page_bundle_collects_assets(
    site_root: Path, make_content: typ.Callable[..., Path]
) -> None:
    make_content(site_root, "_index.md", title="Home")
    page_path = make_content(site_root, "trip/index.md", title="Trip")
    (page_path.parent / "photo.jpg").write_bytes(b"\xff\xd8jpeg")
    (page_path.parent / "notes.txt").write_text("n", encoding="utf-8")

    pages, sections = _load(site_root)
    page = pages[page_path]
    assert page.url == "trip"
    assert [asset.name for asset in page.assets] == ["notes.txt", "photo.jpg"]
    assert page.parent_path == site_root / "content"
    assert sections[site_root / "content"].pages == [page]


def test_drafts_are_skipped(
    site_root: Path, make_content: typ.Callable[..., Path]
) -> None:
    make_content(site_root, "wip.md", title="WIP", draft=True)
    pages, _sections = _load(site_root)
    assert pages == {}


def test_summary_uses_more_marker(
    site_root: Path, make_content: typ.Callable[..., Path]
) -> None:
    path = make_content(
        site_root, "post.md", title="Post", body="Intro text\n\n<!-- more -->\n\nRest\n"
    )
    pages, _sections = _load(site_root)
    assert pages[path].summary == "<p>Intro text</p>"
    assert "Rest" in pages[path].content


def test_invalid_file_aborts_load_naming_file(
    site_root: Path, make_content: typ.Callable[..., Path]
) -> None:
    make_content(site_root, "good.md", title="Good")
    bad = make_content(site_root, "bad.md", title=None)
    with pytest.raises(ContentError) as excinfo:
        _load(site_root)
    assert excinfo.value.path == bad


def test_missing_content_directory_yields_empty_site(tmp_path: Path) -> None:
    (tmp_path / "config.yaml").write_text(
        "title: t\nbase_url: https://e.com\n"
        "generate_categories_pages: false\ngenerate_tags_pages: false\n"
        "generate_rss: false\n",
        encoding="utf-8",
    )
    assert _load(tmp_path) == ({}, {})


@pytest.mark.parametrize(
    ("meta", "fragment"),
    [
        ({"tags": ["real", "."]}, "tag '.'"),
        ({"category": "!!!"}, "category '!!!'"),
    ],
)
def test_unsluggable_listing_names_are_rejected(
    site_root: Path,
    make_content: typ.Callable[..., Path],
    meta: dict[str, object],
    fragment: str,
) -> None:
    bad = make_content(site_root, "post.md", title="Post", **meta)
    with pytest.raises(ContentError) as excinfo:
        _load(site_root)
    assert excinfo.value.path == bad
    assert fragment in str(excinfo.value)


@pytest.mark.parametrize(
    "meta",
    [
        {"url": "../../escaped"},
        {"url": "blog/./post"},
        {"url": "a//b"},
        {"url": "/"},
        {"slug": ".."},
        {"slug": "nested/slug"},
        {"slug": "back\\\\slash"},
    ],
)
def test_path_overrides_cannot_leave_output_tree(
    site_root: Path, make_content: typ.Callable[..., Path], meta: dict[str, str]
) -> None:
    bad = make_content(site_root, "post.md", title="Post", **meta)
    with pytest.raises(ContentError) as excinfo:
        _load(site_root)
    assert excinfo.value.path == bad
