"""
HTML formatter.

Each acronym becomes ``<abbr title="meaning">AEAT</abbr> (meaning)``.
Acronym and meaning are HTML-escaped; text outside the matches is left
untouched.
"""

from __future__ import annotations

import html
from typing import List, Optional

from .base import Formatter, display_text, replace_spans


class HtmlFormatter(Formatter):
    """Wrap acronyms in ``<abbr>`` tags with the meaning as tooltip."""

    name = "html"

    def format(self, original_text: str, matches: List, stats: Optional[object] = None) -> str:
        if not matches:
            return original_text

        def render(match) -> str:
            meaning = html.escape(match.meaning, quote=True)
            return f'<abbr title="{meaning}">{html.escape(display_text(match))}</abbr> ({meaning})'

        return replace_spans(original_text, matches, render)
