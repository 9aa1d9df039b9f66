"""Build static sites from a tree of markdown content.

This package loads markdown pages and sections, derives tag and category
listings, and renders everything through Jinja templates into a static
output directory.

Exports
-------
- ``Site``: controller that parses content and builds the output tree.
- ``app``: Cyclopts application entry for subcommands.
- ``main``: convenience function that invokes the Cyclopts app.

Examples
--------
>>> from pathlib import Path
>>> from folio_pages import Site
>>> site = Site(Path("my-site"))  # doctest: +SKIP
>>> site.parse()  # doctest: +SKIP
>>> site.build()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main
from .site import Site, SiteState

__all__ = ["Site", "SiteState", "app", "main"]
