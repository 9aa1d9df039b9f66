"""Cyclopts CLI entrypoint for building folio sites.

The ``folio`` console script scaffolds new sites and builds existing ones.
Typical usage is ``folio init my-site`` once, then ``folio build --root
my-site`` whenever content, templates or static files change.

Examples
--------
Build the site in the current directory:

>>> from folio_pages.cli import main
>>> main()  # doctest: +SKIP

Build into a scratch directory with live reload enabled:

>>> from folio_pages.cli import app
>>> app(
...     ["build", "--root", "my-site", "--output-dir", "/tmp/out", "--live-reload"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import time
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import CONTENT_DIRNAME, STATIC_DIRNAME, TEMPLATES_DIRNAME
from .errors import SiteError
from .site import Site

logger = logging.getLogger("folio_pages.cli")

app = App(name="folio", config=cyclopts.config.Env("FOLIO_", command=False))  # type: ignore[unknown-argument]

CONFIG_SKELETON = """\
title: "{name}"
base_url: "https://example.com"
description: ""
generate_categories_pages: false
generate_tags_pages: false
generate_rss: false
highlight_code: true
"""


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )


@app.command(help="Build the site into its output directory.")
def build(
    *,
    root: typ.Annotated[Path, Parameter(help="Site root directory")] = Path(),
    output_dir: typ.Annotated[
        Path | None, Parameter(help="Override the output directory")
    ] = None,
    live_reload: typ.Annotated[
        bool, Parameter(help="Inject the live-reload script into HTML pages")
    ] = False,
    verbose: typ.Annotated[bool, Parameter(help="Enable debug logging")] = False,
) -> None:
    """Parse the site at ``root`` and regenerate its output directory.

    Parameters
    ----------
    root : Path, optional
        Directory holding the site configuration, ``content/`` and
        ``templates/``. Defaults to the current directory.
    output_dir : Path or None, optional
        Write output here instead of ``<root>/public``.
    live_reload : bool, optional
        Inject the live-reload script tag into every HTML document.
    verbose : bool, optional
        Log every parsed and written file.

    Raises
    ------
    SystemExit
        With status 1 when the build fails; the error is printed to stderr.
    """
    _configure_logging(verbose=verbose)
    start = time.perf_counter()
    try:
        site = Site(root)
        if output_dir is not None:
            site.set_output_path(output_dir)
        if live_reload:
            site.enable_live_reload()
        site.parse()
        site.build()
    except SiteError as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    elapsed = time.perf_counter() - start
    print(f"wrote {_format_path(site.output_path)} in {elapsed:.2f}s")


@app.command(help="Create the skeleton of a new site.")
def init(name: str) -> None:
    """Scaffold a site directory called ``name``.

    The directory receives a starter ``config.yaml`` together with empty
    ``content/``, ``static/`` and ``templates/`` folders.

    Raises
    ------
    SystemExit
        With status 1 when ``name`` is an existing file or a non-empty
        directory.
    """
    target = Path(name)
    if target.exists() and not target.is_dir():
        msg = f"error: '{name}' already exists and is not a directory"
        print(msg, file=sys.stderr)
        raise SystemExit(1)
    if target.exists() and any(target.iterdir()):
        print(f"error: '{name}' already exists and is not empty", file=sys.stderr)
        raise SystemExit(1)
    for dirname in (CONTENT_DIRNAME, STATIC_DIRNAME, TEMPLATES_DIRNAME):
        (target / dirname).mkdir(parents=True, exist_ok=True)
    config_path = target / "config.yaml"
    config_path.write_text(CONFIG_SKELETON.format(name=target.name), encoding="utf-8")
    print(f"wrote {_format_path(config_path)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``folio`` console command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
