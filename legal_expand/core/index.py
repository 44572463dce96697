"""
Dictionary Index

In-memory lookup structures built once from a CompiledDictionary.

Lookup is tiered; the first tier that yields ids wins:

1. Exact variant match
2. Flexible match (dots and whitespace removed, case kept)
3. Normalized match (case-insensitive lookups only)

When several ids come back, the conflict table picks the default entry.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .dictionary_loader import (
    CompiledDictionary,
    ConflictGroup,
    DictionaryEntry,
    DictionaryError,
)
from .normalizer import normalize, strip_dots_and_spaces
from ..validators.validators import validate_dictionary

logger = logging.getLogger(__name__)


class DictionaryIndex:
    """
    Read-only lookup over a compiled dictionary.

    Construction validates the dictionary and raises DictionaryError on
    any integrity error so a broken dictionary never becomes usable.
    """

    def __init__(self, dictionary: CompiledDictionary):
        result = validate_dictionary(dictionary)
        if not result.valid:
            raise DictionaryError(
                "Invalid compiled dictionary: " + "; ".join(result.errors)
            )
        for warning in result.warnings:
            logger.warning("Dictionary: %s", warning)

        self.dictionary = dictionary
        self._entries: Dict[str, DictionaryEntry] = {e.id: e for e in dictionary.entries}
        self._exact: Dict[str, List[str]] = dict(dictionary.exact_index)
        self._normalized: Dict[str, List[str]] = dict(dictionary.normalized_index)
        self._conflicts: Dict[str, ConflictGroup] = {
            normalize(group.acronym_key): group for group in dictionary.conflicts
        }

        logger.debug(
            "Indexed %d entries, %d exact keys, %d conflicts",
            len(self._entries), len(self._exact), len(self._conflicts),
        )

    @property
    def entries(self) -> List[DictionaryEntry]:
        return list(self.dictionary.entries)

    def get_entry(self, entry_id: str) -> Optional[DictionaryEntry]:
        return self._entries.get(entry_id)

    def lookup_ids(self, surface_text: str, case_sensitive: bool = True) -> List[str]:
        """Return the ids of the first lookup tier that matches, or []."""
        ids = self._exact.get(surface_text)
        if ids:
            return list(ids)

        ids = self._exact.get(strip_dots_and_spaces(surface_text))
        if ids:
            return list(ids)

        if not case_sensitive:
            ids = self._normalized.get(normalize(surface_text))
            if ids:
                return list(ids)

        return []

    def resolve_ids(self, ids: List[str], surface_text: str) -> Optional[DictionaryEntry]:
        """
        Pick one entry from a lookup result.

        A single id resolves to itself. Several ids resolve to the default of
        the conflict group for ``surface_text``; without such a group the
        first id in insertion order is used.
        """
        if not ids:
            return None
        if len(ids) == 1:
            return self._entries.get(ids[0])

        group = self._conflicts.get(normalize(surface_text))
        if group is not None:
            return self._entries.get(group.default_entry_id)

        logger.debug(
            "No conflict group for %r with ids %s, using first id", surface_text, ids
        )
        return self._entries.get(ids[0])

    def lookup(self, surface_text: str, case_sensitive: bool = True) -> Optional[DictionaryEntry]:
        """
        Resolve an acronym string to a dictionary entry.

        Args:
            surface_text: Text as it appears in the document ("A.E.A.T.", "aeat")
            case_sensitive: When False, the normalized index is also consulted

        Returns:
            DictionaryEntry or None if not found
        """
        return self.resolve_ids(self.lookup_ids(surface_text, case_sensitive), surface_text)

    def conflict_for(self, original_form: str) -> Optional[ConflictGroup]:
        return self._conflicts.get(normalize(original_form))

    def has_conflict(self, original_form: str) -> bool:
        return normalize(original_form) in self._conflicts

    def all_meanings(self, original_form: str) -> List[str]:
        """All meanings of an acronym; a single meaning when unambiguous."""
        group = self._conflicts.get(normalize(original_form))
        if group is not None:
            return group.meanings

        entry = self.lookup(original_form)
        return [entry.meaning] if entry else []

    def all_variants(self) -> List[str]:
        """Deduplicated originals and variants of every entry."""
        variants: Dict[str, None] = {}
        for entry in self.dictionary.entries:
            variants[entry.original] = None
            for variant in entry.variants:
                variants[variant] = None
        return list(variants)

    def __len__(self) -> int:
        return len(self._entries)
