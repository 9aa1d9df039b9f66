"""Content discovery, front matter parsing and the in-memory document model."""

from .front_matter import parse_content, split_front_matter
from .loader import load
from .models import FrontMatter, Page, Section, slugify, sort_pages

__all__ = [
    "FrontMatter",
    "Page",
    "Section",
    "load",
    "parse_content",
    "slugify",
    "sort_pages",
    "split_front_matter",
]
