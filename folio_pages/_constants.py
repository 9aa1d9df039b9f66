"""Common literal values used across folio_pages.

These constants keep filenames and fixed snippets centralized so the loader,
renderer, and tests import the same values without drifting. Intended for
internal use within the folio_pages package.

Examples
--------
>>> from folio_pages import _constants
>>> _constants.SECTION_INDEX_FILENAME
'_index.md'
>>> _constants.LIVE_RELOAD_SNIPPET.startswith('<script')
True
"""

CONTENT_DIRNAME = "content"
STATIC_DIRNAME = "static"
TEMPLATES_DIRNAME = "templates"
DEFAULT_OUTPUT_DIRNAME = "public"

CONTENT_EXTENSION = ".md"
SECTION_INDEX_FILENAME = "_index.md"
PAGE_BUNDLE_STEM = "index"
OUTPUT_INDEX_FILENAME = "index.html"

PAGE_TEMPLATE = "page.html"
SECTION_TEMPLATE = "section.html"
INDEX_TEMPLATE = "index.html"
SITEMAP_TEMPLATE = "sitemap.xml"
FEED_TEMPLATE = "rss.xml"

SITEMAP_FILENAME = "sitemap.xml"
FEED_FILENAME = "feed.xml"
FEED_LIMIT = 15

SUMMARY_SEPARATOR = "<!-- more -->"
LIVE_RELOAD_SNIPPET = '<script src="/livereload.js?port=1112&mindelay=10"></script>'
