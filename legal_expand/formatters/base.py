"""
Formatter interface.

A formatter turns the original text plus the accepted matches of one scan
into an output value. Matches carry offsets into the original text, so
formatters never re-scan.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, List, Optional

if TYPE_CHECKING:
    from ..core.matcher import MatchCandidate, ScanStats


class Formatter(ABC):
    """Base class for output formatters."""

    #: Name used to register the formatter
    name: str = ""

    @abstractmethod
    def format(
        self,
        original_text: str,
        matches: List['MatchCandidate'],
        stats: Optional['ScanStats'] = None,
    ) -> Any:
        """Render ``original_text`` with ``matches`` expanded."""


def display_text(match) -> str:
    """Form of the acronym to render: canonical or as found in the text."""
    return match.display_text or match.surface_text


def replace_spans(original_text: str, matches: List['MatchCandidate'], render) -> str:
    """
    Replace every match span with ``render(match)``.

    Spans are replaced right to left so earlier offsets stay valid.
    """
    result = original_text
    for match in sorted(matches, key=lambda m: m.start, reverse=True):
        result = result[:match.start] + render(match) + result[match.end:]
    return result
