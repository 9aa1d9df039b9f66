"""Render markdown bodies into HTML with optional Pygments highlighting.

Fence info strings are reduced to their language before conversion, so
```` ```rust,no_run ```` renders as a ``rust`` block. With highlighting on,
each ``codehilite`` block is tagged with ``data-language`` (``text`` when
the fence names no language).
"""

from __future__ import annotations

import re
import typing as typ
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

FENCE_LINE_PATTERN = re.compile(r"^(?P<fence>`{3,}|~{3,})(?P<info>.*)$")
HIGHLIGHT_OPEN_TAG = '<div class="codehilite">'
PLAIN_LANGUAGE = "text"


def split_fences(text: str) -> tuple[str, list[str]]:
    """Strip fence attributes and collect the language of every fenced block.

    Returns
    -------
    tuple[str, list[str]]
        The markdown with each opening fence reduced to ``<fence><language>``
        and the block languages in document order.

    Examples
    --------
    >>> split_fences("```rust,no_run\\nfn main() {}\\n```\\n")
    ('```rust\\nfn main() {}\\n```\\n', ['rust'])
    """
    lines = text.splitlines(keepends=True)
    languages: list[str] = []
    open_fence: str | None = None
    for index, line in enumerate(lines):
        stripped = line.rstrip("\r\n")
        match = FENCE_LINE_PATTERN.match(stripped)
        if match is None:
            continue
        fence, info = match["fence"], match["info"].strip()
        if open_fence is None:
            words = info.split(",", 1)[0].split()
            language = words[0] if words else ""
            languages.append(language or PLAIN_LANGUAGE)
            lines[index] = f"{fence}{language}{line[len(stripped):]}"
            open_fence = fence
        elif (
            not info
            and fence[0] == open_fence[0]
            and len(fence) >= len(open_fence)
        ):
            open_fence = None
    return "".join(lines), languages


def label_highlighted_blocks(html: str, languages: typ.Sequence[str]) -> str:
    """Add ``data-language`` to each highlighted block, pairing them in order."""
    head, *blocks = html.split(HIGHLIGHT_OPEN_TAG)
    padded = [*languages, *[PLAIN_LANGUAGE] * (len(blocks) - len(languages))]
    labelled = [head]
    for block, language in zip(blocks, padded, strict=False):
        attr = escape(language, quote=True)
        labelled.append(f'<div class="codehilite" data-language="{attr}">{block}')
    return "".join(labelled)


class MarkdownRenderer:
    """Render page and section bodies with consistent extensions and styling."""

    def __init__(
        self, *, highlight_code: bool = True, pygments_style: str = "monokai"
    ) -> None:
        """Initialize a renderer.

        Parameters
        ----------
        highlight_code : bool, optional
            When ``True`` fenced code blocks are highlighted through Pygments
            and annotated with a ``data-language`` attribute.
        pygments_style : str, optional
            Name of the Pygments style used for highlighting. Defaults to
            ``"monokai"``.
        """
        self.highlight_code = highlight_code
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        if not self.highlight_code:
            return ""
        return self._formatter.get_style_defs(".codehilite")

    def render(self, text: str) -> str:
        """Render markdown into HTML using the configured extensions."""
        if not text.strip():
            return ""
        source, languages = split_fences(text)
        md = Markdown(extensions=self._extensions(), extension_configs=self._configs())
        html = md.convert(source)
        if not self.highlight_code:
            return html
        return label_highlighted_blocks(html, languages)

    def _extensions(self) -> list[Extension | str]:
        extensions: list[Extension | str] = ["fenced_code", "tables", "sane_lists"]
        if self.highlight_code:
            extensions.append("codehilite")
        return extensions

    def _configs(self) -> dict[str, dict[str, typ.Any]]:
        if not self.highlight_code:
            return {}
        return {
            "codehilite": {
                "linenums": False,
                "guess_lang": False,
                "css_class": "codehilite",
                "pygments_style": self.pygments_style,
            }
        }


__all__ = ["MarkdownRenderer", "label_highlighted_blocks", "split_fences"]
