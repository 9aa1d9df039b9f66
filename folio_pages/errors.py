"""Typed failures raised by the folio build pipeline.

Every component raises one of these exceptions at its boundary, wrapping the
underlying library error (``jinja2.TemplateError``, ``OSError``,
``YAMLError``...) with ``raise ... from exc`` so the original cause stays
attached. Nothing in the pipeline retries or swallows them; the site
controller lets the first failure propagate and stops the current transition.

Examples
--------
>>> from pathlib import Path
>>> from folio_pages.errors import ContentError
>>> str(ContentError(Path("content/post.md"), "missing 'title'"))
"content/post.md: missing 'title'"
"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path


class SiteError(Exception):
    """Base class for every failure raised while loading or building a site."""


class SiteConfigError(SiteError, ValueError):
    """Raised when the site configuration is invalid or incomplete."""


class ContentError(SiteError):
    """Raised when a content file cannot be parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class TemplateRenderError(SiteError):
    """Raised when a template is missing or fails to render."""

    def __init__(self, template: str, reason: str) -> None:
        self.template = template
        self.reason = reason
        super().__init__(f"Failed to render '{template}': {reason}")


class OutputError(SiteError):
    """Raised when the output tree cannot be written or cleaned."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class SiteStateError(SiteError):
    """Raised when a site operation runs before its prerequisites."""


__all__ = [
    "ContentError",
    "OutputError",
    "SiteConfigError",
    "SiteError",
    "SiteStateError",
    "TemplateRenderError",
]
