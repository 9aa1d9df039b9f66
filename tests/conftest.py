"""Shared fixtures building throwaway folio sites under ``tmp_path``."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest

DEFAULT_TEMPLATES: dict[str, str] = {
    "page.html": (
        "<html><body><h1>{{ page.title }}</h1>"
        "<div class='content'>{{ page.content | safe }}</div></body></html>"
    ),
    "section.html": (
        "<html><body><h1>{{ section.title }}</h1>"
        "<ul>{% for p in pages %}<li class='page'>{{ p.title }}</li>{% endfor %}</ul>"
        "<ul>{% for s in subsections %}<li class='sub'>{{ s.title }}</li>{% endfor %}"
        "</ul></body></html>"
    ),
    "index.html": (
        "<html><body><ul>{% for p in pages %}<li>{{ p.title }}</li>{% endfor %}"
        "</ul></body></html>"
    ),
    "tags.html": (
        "<html><body><ul>{% for t in tags %}"
        "<li data-count='{{ t.count }}' data-slug='{{ t.slug }}'>{{ t.name }}</li>"
        "{% endfor %}</ul></body></html>"
    ),
    "tag.html": (
        "<html><body><h1>{{ tag }}</h1><ul>{% for p in pages %}"
        "<li>{{ p.title }}</li>{% endfor %}</ul></body></html>"
    ),
    "categories.html": (
        "<html><body><ul>{% for c in categories %}"
        "<li data-count='{{ c.count }}'>{{ c.name }}</li>{% endfor %}</ul></body></html>"
    ),
    "category.html": (
        "<html><body><h1>{{ category }}</h1><ul>{% for p in pages %}"
        "<li>{{ p.title }}</li>{% endfor %}</ul></body></html>"
    ),
}

DEFAULT_CONFIG: dict[str, typ.Any] = {
    "title": "Fixture Site",
    "base_url": "https://example.com",
    "generate_categories_pages": True,
    "generate_tags_pages": True,
    "generate_rss": True,
}


def _yaml_scalar(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return f'"{value}"'


def write_site(
    root: Path,
    *,
    config: typ.Mapping[str, typ.Any] | None = None,
    templates: typ.Mapping[str, str] | None = None,
) -> Path:
    """Create the configuration and templates of a site rooted at ``root``."""
    settings = dict(DEFAULT_CONFIG)
    settings.update(config or {})
    lines = [f"{key}: {_yaml_scalar(value)}" for key, value in settings.items()]
    root.mkdir(parents=True, exist_ok=True)
    (root / "config.yaml").write_text("\n".join(lines) + "\n", encoding="utf-8")
    templates_dir = root / "templates"
    templates_dir.mkdir(exist_ok=True)
    for name, body in (templates if templates is not None else DEFAULT_TEMPLATES).items():
        (templates_dir / name).write_text(body, encoding="utf-8")
    (root / "content").mkdir(exist_ok=True)
    return root


def write_content(
    root: Path,
    relative: str,
    *,
    title: str | None = "Untitled",
    body: str = "Body text.\n",
    **meta: object,
) -> Path:
    """Write a YAML-fronted markdown file at ``root/content/relative``."""
    lines = ["---"]
    if title is not None:
        lines.append(f'title: "{title}"')
    for key, value in meta.items():
        if isinstance(value, (list, tuple)):
            items = ", ".join(f'"{item}"' for item in value)
            lines.append(f"{key}: [{items}]")
        else:
            lines.append(f"{key}: {_yaml_scalar(value)}")
    lines.append("---")
    path = root / "content" / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n" + body, encoding="utf-8")
    return path


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Return a site root with the default configuration and templates."""
    return write_site(tmp_path / "site")


@pytest.fixture
def scenario_root(site_root: Path) -> Path:
    """Return a site with a root section, a tagged post and a nested section."""
    write_content(site_root, "_index.md", title="Home")
    write_content(
        site_root,
        "post.md",
        title="Post",
        date="2024-03-01",
        category="rust",
        tags=["a"],
    )
    write_content(site_root, "sub/_index.md", title="Sub")
    write_content(site_root, "sub/child.md", title="Child", date="2024-01-15")
    return site_root


@pytest.fixture
def make_site() -> typ.Callable[..., Path]:
    """Return :func:`write_site` so tests can build custom sites."""
    return write_site


@pytest.fixture
def make_content() -> typ.Callable[..., Path]:
    """Return :func:`write_content` so tests can add content files."""
    return write_content
