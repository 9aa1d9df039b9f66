"""Load and validate the site configuration for folio builds.

This subpackage reads the site's ``config.yaml`` (or ``config.toml``), checks
that the required settings are present, applies defaults, and produces the
strongly typed :class:`SiteConfig` consumed by the loader and renderer. The
primary entry point is :func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from folio_pages.config import load_site_config
>>> site = load_site_config(Path("my-site"))  # doctest: +SKIP
>>> site.generate_rss  # doctest: +SKIP
True
"""

from .loader import CONFIG_FILENAMES, find_config_file, load_site_config
from .models import SiteConfig, SiteConfigError

__all__ = [
    "CONFIG_FILENAMES",
    "SiteConfig",
    "SiteConfigError",
    "find_config_file",
    "load_site_config",
]
