"""Rendering of markdown bodies, templates and output documents."""

from .renderer import MarkdownRenderer
from .site_renderer import SiteRenderer
from .templates import BUILTIN_TEMPLATES, TemplateSet

__all__ = ["BUILTIN_TEMPLATES", "MarkdownRenderer", "SiteRenderer", "TemplateSet"]
