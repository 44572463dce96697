"""
Structured formatter.

Returns a StructuredOutput object instead of a string: the original text,
the plain-text expansion, one record per expanded acronym and run stats.
DiagnosticOutput extends it with the omitted candidates.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .base import Formatter
from .plain_text import PlainTextFormatter


@dataclass
class ExpandedAcronym:
    """
    One expanded acronym in structured output.

    Attributes:
        acronym: Surface text as found in the input
        expansion: Meaning used for the expansion
        start: Start offset in the original text
        end: End offset in the original text
        has_multiple_meanings: True when the acronym is ambiguous
        all_meanings: Every meaning of an ambiguous acronym
    """
    acronym: str
    expansion: str
    start: int
    end: int
    has_multiple_meanings: bool = False
    all_meanings: Optional[List[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'acronym': self.acronym,
            'expansion': self.expansion,
            'position': {'start': self.start, 'end': self.end},
            'has_multiple_meanings': self.has_multiple_meanings,
        }
        if self.all_meanings:
            data['all_meanings'] = list(self.all_meanings)
        return data


@dataclass
class OutputStats:
    total_acronyms_found: int = 0
    total_expanded: int = 0
    ambiguous_not_expanded: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            'total_acronyms_found': self.total_acronyms_found,
            'total_expanded': self.total_expanded,
            'ambiguous_not_expanded': self.ambiguous_not_expanded,
        }


@dataclass
class StructuredOutput:
    """Expansion result as data."""
    original_text: str
    expanded_text: str
    acronyms: List[ExpandedAcronym] = field(default_factory=list)
    stats: OutputStats = field(default_factory=OutputStats)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'original_text': self.original_text,
            'expanded_text': self.expanded_text,
            'acronyms': [a.to_dict() for a in self.acronyms],
            'stats': self.stats.to_dict(),
        }

    def to_json(self, indent: int = 2) -> str:
        """Export result to JSON."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)

    @classmethod
    def empty(cls, text: str) -> 'StructuredOutput':
        """Well-formed result for text that was not processed."""
        return cls(original_text=text, expanded_text=text)


@dataclass
class OmittedAcronym:
    """A candidate that was recognised but not expanded."""
    acronym: str
    start: int
    end: int
    reason: str
    details: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'acronym': self.acronym,
            'position': {'start': self.start, 'end': self.end},
            'reason': self.reason,
        }
        if self.details:
            data['details'] = self.details
        return data


@dataclass
class DiagnosticOutput(StructuredOutput):
    """Structured output plus every omitted candidate and its reason."""
    omitted_acronyms: List[OmittedAcronym] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data['omitted_acronyms'] = [o.to_dict() for o in self.omitted_acronyms]
        return data


class StructuredFormatter(Formatter):
    """Build a StructuredOutput; the expanded text comes from the plain formatter."""

    name = "structured"

    def __init__(self):
        self._plain = PlainTextFormatter()

    def format(self, original_text: str, matches: List, stats: Optional[object] = None) -> StructuredOutput:
        acronyms = [
            ExpandedAcronym(
                acronym=m.surface_text,
                expansion=m.meaning,
                start=m.start,
                end=m.end,
                has_multiple_meanings=m.has_multiple_meanings,
                all_meanings=list(m.all_meanings) if m.all_meanings else None,
            )
            for m in matches
        ]

        if stats is not None:
            output_stats = OutputStats(
                total_acronyms_found=stats.total_found,
                total_expanded=stats.total_expanded,
                ambiguous_not_expanded=stats.ambiguous_not_expanded,
            )
        else:
            output_stats = OutputStats(
                total_acronyms_found=len(matches),
                total_expanded=len(matches),
            )

        return StructuredOutput(
            original_text=original_text,
            expanded_text=self._plain.format(original_text, matches),
            acronyms=acronyms,
            stats=output_stats,
        )
