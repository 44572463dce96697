"""
Plain text formatter: ``AEAT`` -> ``AEAT (Agencia Estatal de Administración Tributaria)``.
"""

from __future__ import annotations

from typing import List, Optional

from .base import Formatter, display_text, replace_spans


class PlainTextFormatter(Formatter):
    """Append the meaning in parentheses after each acronym."""

    name = "plain"

    def format(self, original_text: str, matches: List, stats: Optional[object] = None) -> str:
        if not matches:
            return original_text
        return replace_spans(
            original_text,
            matches,
            lambda m: f"{display_text(m)} ({m.meaning})",
        )
