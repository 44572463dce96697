"""
Acronym Matcher

Scans text for known acronyms with a single precompiled regex and decides,
candidate by candidate, whether each one is expanded.

Pattern: every original and variant of the dictionary, longest first,
joined into one alternation and guarded by word-character lookarounds.
Longest-first ordering makes "art." win over "art" at the same offset.

Rejection pipeline (first applicable rule wins):

1. Glued to a longer alphanumeric run (silently skipped)
2. Inside a URL, email, fenced code block or inline code span
   (case-only matches under preserve_case are then re-scanned for
   exact-case forms inside them and otherwise silently skipped)
3. Exclude filter
4. Include filter
5. Only the first occurrence is expanded
6. Not resolvable in the dictionary
7. Ambiguous with no manual or automatic resolution

Offsets always refer to the original input string.
"""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Set

from .dictionary_loader import CompiledDictionary, DictionaryEntry, load_dictionary
from .index import DictionaryIndex
from .normalizer import (
    WORD_CHAR_CLASS,
    escape_for_regex,
    is_part_of_larger_token,
    normalize,
    special_context,
)
from ..config import ResolvedOptions

logger = logging.getLogger(__name__)


class OmissionReason(str, Enum):
    """Why a recognised candidate was not expanded."""
    EXCLUDED = "excluded"
    NOT_IN_INCLUDE = "not-in-include"
    EXPAND_ONLY_FIRST = "expand-only-first"
    AMBIGUOUS_UNRESOLVED = "ambiguous-unresolved"
    INSIDE_URL = "inside-url"
    INSIDE_EMAIL = "inside-email"
    INSIDE_CODE_BLOCK = "inside-code-block"
    INSIDE_INLINE_CODE = "inside-inline-code"
    NOT_FOUND = "not-found"


_CONTEXT_REASONS = {
    'url': OmissionReason.INSIDE_URL,
    'email': OmissionReason.INSIDE_EMAIL,
    'code-block': OmissionReason.INSIDE_CODE_BLOCK,
    'inline-code': OmissionReason.INSIDE_INLINE_CODE,
}


@dataclass
class MatchCandidate:
    """
    An accepted acronym occurrence.

    Attributes:
        surface_text: Text exactly as found (``text[start:end]``)
        start: Start offset in the input
        end: End offset in the input (exclusive)
        meaning: Resolved meaning
        entry_id: Dictionary entry the occurrence resolved to
        canonical: Dictionary form of the acronym ("AEAT")
        display_text: Form rendered by formatters
        has_multiple_meanings: True when the acronym is ambiguous
        all_meanings: Every meaning of an ambiguous acronym
    """
    surface_text: str
    start: int
    end: int
    meaning: str
    entry_id: str = ""
    canonical: str = ""
    display_text: str = ""
    has_multiple_meanings: bool = False
    all_meanings: Optional[List[str]] = None


@dataclass
class OmittedCandidate:
    """A recognised occurrence that was not expanded."""
    surface_text: str
    start: int
    end: int
    reason: OmissionReason
    details: Optional[str] = None


@dataclass
class ScanStats:
    """
    Run-level counters.

    ``total_found`` counts every dictionary acronym the options acted on:
    expanded ones, unresolved ambiguous ones and ones removed by the
    exclude/include/only-first options. Protected contexts and unknown
    strings are not counted.
    """
    total_found: int = 0
    total_expanded: int = 0
    ambiguous_not_expanded: int = 0


@dataclass
class ScanResult:
    """Matches, omissions and stats from one scan."""
    matches: List[MatchCandidate] = field(default_factory=list)
    omitted: List[OmittedCandidate] = field(default_factory=list)
    stats: ScanStats = field(default_factory=ScanStats)


@dataclass
class AcronymSearchResult:
    """Result of looking up a single acronym."""
    acronym: str
    meanings: List[str]
    has_duplicates: bool


@dataclass
class DictionaryStats:
    """Summary counts for the loaded dictionary."""
    total_acronyms: int
    acronyms_with_duplicates: int
    acronyms_with_punctuation: int


def build_pattern(variants: Iterable[str], ignore_case: bool = True) -> Optional[re.Pattern]:
    """
    Compile the scanning regex from a set of variants.

    Returns None when there is nothing to match.
    """
    unique = sorted(set(v for v in variants if v), key=len, reverse=True)
    if not unique:
        return None

    alternation = '|'.join(escape_for_regex(v) for v in unique)
    pattern = f'(?<!{WORD_CHAR_CLASS})(?:{alternation})(?!{WORD_CHAR_CLASS})'
    # Case is enforced at lookup time so lowercase occurrences in URLs and
    # emails are still recognised and protected.
    return re.compile(pattern, re.IGNORECASE if ignore_case else 0)


def display_form(surface: str, entry: DictionaryEntry) -> str:
    """
    Form rendered for a match found with case-insensitive lookup.

    The surface keeps its shape; only its case is taken from the entry's
    original or one of its variants ("aeat" -> "AEAT", "at" -> "AT").
    """
    folded = surface.casefold()
    for form in [entry.original] + list(entry.variants):
        if form.casefold() == folded:
            return form
    return surface


def _matches_any(norm: str, terms: Iterable[str]) -> bool:
    return any(normalize(term) == norm for term in terms)


def _manual_resolution(norm: str, resolution: dict) -> Optional[str]:
    for key, meaning in resolution.items():
        if normalize(key) == norm and meaning:
            return meaning
    return None


class AcronymMatcher:
    """
    Scanner bound to one dictionary index.

    The index and pattern are built at construction and never change;
    all per-scan state lives inside :meth:`scan`.
    """

    def __init__(
        self,
        dictionary: Optional[CompiledDictionary] = None,
        index: Optional[DictionaryIndex] = None,
    ):
        if index is None:
            index = DictionaryIndex(dictionary if dictionary is not None else load_dictionary())
        self.index = index
        variants = index.all_variants()
        self._variants = set(variants)
        self.pattern = build_pattern(variants)
        self.exact_pattern = build_pattern(variants, ignore_case=False)
        logger.debug("Compiled matcher pattern over %d variants", len(variants))

    def scan(self, text: str, options: Optional[ResolvedOptions] = None) -> ScanResult:
        """
        Find and resolve every acronym in ``text``.

        Args:
            text: Input text
            options: Resolved options (built-in defaults if omitted)

        Returns:
            ScanResult with accepted matches in left-to-right order,
            every omission with its reason, and run stats
        """
        result = ScanResult()
        if not text or not text.strip() or self.pattern is None:
            return result

        opts = options or ResolvedOptions()
        stats = result.stats
        seen: Set[str] = set()

        def omit(surface: str, start: int, end: int,
                 reason: OmissionReason, details: Optional[str] = None) -> None:
            logger.debug("Omitting %r at %d: %s", surface, start, reason.value)
            result.omitted.append(OmittedCandidate(surface, start, end, reason, details))

        def consider(start: int, end: int) -> None:
            surface = text[start:end]

            if is_part_of_larger_token(text, start, end):
                return

            context = special_context(text, start, end)
            if context is not None:
                omit(surface, start, end, _CONTEXT_REASONS[context])
                return

            if (opts.preserve_case and surface not in self._variants
                    and not self.index.lookup_ids(surface)):
                # Matched only by ignoring case; try the exact-case forms inside it
                for inner in self.exact_pattern.finditer(text, start, end):
                    consider(inner.start(), inner.end())
                return

            norm = normalize(surface)

            if opts.exclude and _matches_any(norm, opts.exclude):
                stats.total_found += 1
                omit(surface, start, end, OmissionReason.EXCLUDED)
                return

            if opts.include and not _matches_any(norm, opts.include):
                stats.total_found += 1
                omit(surface, start, end, OmissionReason.NOT_IN_INCLUDE)
                return

            if opts.expand_only_first and norm in seen:
                stats.total_found += 1
                omit(surface, start, end, OmissionReason.EXPAND_ONLY_FIRST,
                     "Already expanded earlier in the text")
                return

            entry = self.index.lookup(surface, case_sensitive=opts.preserve_case)
            if entry is None:
                omit(surface, start, end, OmissionReason.NOT_FOUND)
                return

            meaning = entry.meaning
            all_meanings = None
            group = self.index.conflict_for(entry.original)
            if group is not None:
                all_meanings = group.meanings
                manual = _manual_resolution(norm, opts.duplicate_resolution)
                if manual is not None:
                    meaning = manual
                elif opts.auto_resolve_duplicates:
                    default = self.index.get_entry(group.default_entry_id)
                    meaning = default.meaning if default else entry.meaning
                else:
                    stats.total_found += 1
                    stats.ambiguous_not_expanded += 1
                    omit(surface, start, end, OmissionReason.AMBIGUOUS_UNRESOLVED,
                         "Possible meanings: " + " | ".join(all_meanings))
                    return

            seen.add(norm)
            stats.total_found += 1
            stats.total_expanded += 1
            result.matches.append(MatchCandidate(
                surface_text=surface,
                start=start,
                end=end,
                meaning=meaning,
                entry_id=entry.id,
                canonical=entry.original,
                display_text=surface if opts.preserve_case else display_form(surface, entry),
                has_multiple_meanings=group is not None,
                all_meanings=all_meanings,
            ))

        for match in self.pattern.finditer(text):
            consider(match.start(), match.end())

        return result

    def find_acronym(self, acronym: str) -> Optional[AcronymSearchResult]:
        """Look up one acronym (case-sensitive) and report all its meanings."""
        entry = self.index.lookup(acronym, case_sensitive=True)
        if entry is None:
            return None

        has_duplicates = self.index.has_conflict(entry.original)
        meanings = self.index.all_meanings(entry.original) if has_duplicates else [entry.meaning]
        return AcronymSearchResult(
            acronym=entry.original,
            meanings=meanings,
            has_duplicates=has_duplicates,
        )

    def list_acronyms(self) -> List[str]:
        """Original forms of every entry, without repeats."""
        return list(dict.fromkeys(e.original for e in self.index.entries))

    def dictionary_stats(self) -> DictionaryStats:
        entries = self.index.entries
        return DictionaryStats(
            total_acronyms=len(entries),
            acronyms_with_duplicates=sum(
                1 for e in entries if self.index.has_conflict(e.original)
            ),
            acronyms_with_punctuation=sum(1 for e in entries if '.' in e.original),
        )


# Global matcher instance, built on first use
_matcher: Optional[AcronymMatcher] = None
_matcher_lock = threading.Lock()


def get_matcher() -> AcronymMatcher:
    """Return the process-wide matcher over the bundled dictionary."""
    global _matcher

    if _matcher is not None:
        return _matcher

    with _matcher_lock:
        if _matcher is None:
            _matcher = AcronymMatcher()
        return _matcher
