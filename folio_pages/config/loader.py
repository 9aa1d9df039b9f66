"""Load site configuration files into the typed :class:`SiteConfig`."""

from __future__ import annotations

import logging
import tomllib
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .helpers import (
    REQUIRED_TOGGLES,
    _optional_bool,
    _optional_str,
    _require_bool,
    _require_str,
)
from .models import SiteConfig, SiteConfigError

logger = logging.getLogger("folio_pages.config")

CONFIG_FILENAMES = ("config.yaml", "config.yml", "config.toml")


def find_config_file(root: Path) -> Path:
    """Return the first configuration file present under ``root``.

    Raises
    ------
    SiteConfigError
        If none of ``config.yaml``, ``config.yml`` or ``config.toml`` exist.
    """
    for name in CONFIG_FILENAMES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    names = ", ".join(CONFIG_FILENAMES)
    msg = f"No configuration file found in '{root}' (expected one of: {names})."
    raise SiteConfigError(msg)


def load_site_config(path: Path) -> SiteConfig:
    """Load the site configuration stored at ``path`` or under directory ``path``.

    Parameters
    ----------
    path : Path
        Either the configuration file itself or the site root containing it.
        Files ending in ``.toml`` are read with :mod:`tomllib`; anything else
        is parsed as YAML 1.2.

    Returns
    -------
    SiteConfig
        Fully resolved configuration.

    Raises
    ------
    SiteConfigError
        If the file is missing, cannot be parsed, is not a mapping, or lacks
        one of the required settings (``title``, ``base_url`` and the three
        generation toggles).

    Examples
    --------
    >>> from pathlib import Path
    >>> config = load_site_config(Path("my-site"))  # doctest: +SKIP
    >>> config.make_permalink("about")  # doctest: +SKIP
    'https://example.com/about/'
    """
    config_path = find_config_file(path) if path.is_dir() else path
    if not config_path.exists():
        msg = f"Configuration file '{config_path}' not found."
        raise SiteConfigError(msg)

    raw = _read_mapping(config_path)
    logger.debug("Loaded configuration from %s", config_path)
    return _build_site_config(raw)


def _read_mapping(config_path: Path) -> dict[str, typ.Any]:
    """Parse ``config_path`` and return its top-level mapping."""
    try:
        if config_path.suffix == ".toml":
            with config_path.open("rb") as handle:
                loaded: object = tomllib.load(handle)
        else:
            loader = YAML(typ="safe")
            loader.version = (1, 2)
            with config_path.open("r", encoding="utf-8") as handle:
                loaded = loader.load(handle) or {}
    except (YAMLError, tomllib.TOMLDecodeError) as exc:
        msg = f"Configuration file '{config_path}' could not be parsed: {exc}"
        raise SiteConfigError(msg) from exc
    if not isinstance(loaded, dict):
        msg = "Top-level configuration structure must be a mapping."
        raise SiteConfigError(msg)
    return dict(loaded)


def _build_site_config(raw: typ.Mapping[str, typ.Any]) -> SiteConfig:
    """Validate ``raw`` and build the SiteConfig it describes."""
    toggles = {key: _require_bool(raw, key) for key in REQUIRED_TOGGLES}
    extra = raw.get("extra") or {}
    if not isinstance(extra, dict):
        msg = "Setting 'extra' must be a mapping."
        raise SiteConfigError(msg)

    return SiteConfig(
        title=_require_str(raw, "title"),
        base_url=_require_str(raw, "base_url"),
        generate_categories_pages=toggles["generate_categories_pages"],
        generate_tags_pages=toggles["generate_tags_pages"],
        generate_rss=toggles["generate_rss"],
        description=_optional_str(raw.get("description")) or "",
        language_code=_optional_str(raw.get("language_code")) or "en",
        highlight_code=_optional_bool(raw, "highlight_code", default=True),
        pygments_style=_optional_str(raw.get("pygments_style")) or "monokai",
        extra=dict(extra),
    )


__all__ = ["CONFIG_FILENAMES", "find_config_file", "load_site_config"]
