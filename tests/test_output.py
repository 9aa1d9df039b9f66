"""Tests for the output tree writer."""

from __future__ import annotations

from pathlib import Path

import pytest

from folio_pages.errors import OutputError
from folio_pages.output import OutputWriter


def test_clean_removes_output_tree(tmp_path: Path) -> None:
    out = tmp_path / "public"
    (out / "nested").mkdir(parents=True)
    (out / "nested" / "index.html").write_text("x", encoding="utf-8")
    OutputWriter(out).clean()
    assert not out.exists()


def test_clean_missing_directory_is_noop(tmp_path: Path) -> None:
    OutputWriter(tmp_path / "absent").clean()


def test_create_file_creates_parents_and_overwrites(tmp_path: Path) -> None:
    writer = OutputWriter(tmp_path / "public")
    target = tmp_path / "public" / "a" / "b" / "index.html"
    writer.create_file(target, "first")
    writer.create_file(target, "second")
    assert target.read_text(encoding="utf-8") == "second"


def test_create_directory_is_idempotent(tmp_path: Path) -> None:
    writer = OutputWriter(tmp_path / "public")
    path = tmp_path / "public" / "x"
    assert writer.create_directory(path) == path
    assert writer.create_directory(path) == path
    assert path.is_dir()


def test_create_file_failure_is_output_error(tmp_path: Path) -> None:
    blocker = tmp_path / "public"
    blocker.write_text("not a directory", encoding="utf-8")
    writer = OutputWriter(blocker)
    with pytest.raises(OutputError) as excinfo:
        writer.create_file(blocker / "index.html", "x")
    assert excinfo.value.path == blocker


def test_copy_static_adds_and_overwrites_without_pruning(tmp_path: Path) -> None:
    root = tmp_path / "site"
    static = root / "static"
    (static / "css").mkdir(parents=True)
    (static / "css" / "style.css").write_text("body {}", encoding="utf-8")
    (static / "robots.txt").write_text("new", encoding="utf-8")

    out = tmp_path / "public"
    out.mkdir()
    (out / "robots.txt").write_text("old", encoding="utf-8")
    (out / "stale.txt").write_text("keep me", encoding="utf-8")

    copied = OutputWriter(out).copy_static(root)

    assert sorted(copied) == [out / "css" / "style.css", out / "robots.txt"]
    assert (out / "robots.txt").read_text(encoding="utf-8") == "new"
    assert (out / "css" / "style.css").read_text(encoding="utf-8") == "body {}"
    assert (out / "stale.txt").read_text(encoding="utf-8") == "keep me"


def test_copy_static_without_static_directory(tmp_path: Path) -> None:
    assert OutputWriter(tmp_path / "public").copy_static(tmp_path) == []
