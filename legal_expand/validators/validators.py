"""
Compiled Dictionary Validation

Integrity checks run before a compiled dictionary is indexed:
- Entry identity (ids present and unique)
- Entry content (original, meaning, variants)
- Index consistency (every referenced id exists)
- Conflict table consistency (defaults, candidates, group size)

Errors make the dictionary unusable; warnings flag content that is
tolerated but probably not intended.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List

from ..core.normalizer import normalize

if TYPE_CHECKING:
    from ..core.dictionary_loader import CompiledDictionary


@dataclass
class ValidationResult:
    """Result of a validation operation."""
    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    meta: Dict[str, Any] = field(default_factory=dict)


def validate_entries(dictionary: 'CompiledDictionary') -> ValidationResult:
    """Check ids, originals, meanings and variants of every entry."""
    errors: List[str] = []
    warnings: List[str] = []

    if not dictionary.entries:
        errors.append("Dictionary has no entries")

    seen_ids = set()
    for entry in dictionary.entries:
        if not entry.id:
            errors.append(f"Entry {entry.original!r} has an empty id")
        elif entry.id in seen_ids:
            errors.append(f"Duplicate entry id: {entry.id}")
        seen_ids.add(entry.id)

        if not entry.original:
            errors.append(f"Entry {entry.id} has an empty original form")
        if not entry.meaning:
            errors.append(f"Entry {entry.id} has an empty meaning")

        if not entry.variants:
            errors.append(f"Entry {entry.id} has no variants")
            continue
        if entry.original and entry.original not in entry.variants:
            warnings.append(f"Entry {entry.id}: original {entry.original!r} missing from variants")
        repeated = [v for v, n in Counter(entry.variants).items() if n > 1]
        if repeated:
            warnings.append(f"Entry {entry.id}: repeated variants {repeated}")

    pairs = Counter((e.original, e.meaning) for e in dictionary.entries)
    for (original, meaning), count in pairs.items():
        if count > 1:
            warnings.append(f"{original!r} -> {meaning!r} appears in {count} entries")

    return ValidationResult(
        valid=not errors,
        errors=errors,
        warnings=warnings,
        meta={'entries': len(dictionary.entries)},
    )


def validate_index(dictionary: 'CompiledDictionary') -> ValidationResult:
    """Check that the exact and normalized indices only reference known ids."""
    errors: List[str] = []
    entry_ids = {e.id for e in dictionary.entries}

    for name, index in (('exact', dictionary.exact_index),
                        ('normalized', dictionary.normalized_index)):
        for key, ids in index.items():
            if not key:
                errors.append(f"{name} index has an empty key")
            if not ids:
                errors.append(f"{name} index key {key!r} has no entry ids")
            for entry_id in ids:
                if entry_id not in entry_ids:
                    errors.append(f"{name} index key {key!r} references unknown id {entry_id}")

    return ValidationResult(
        valid=not errors,
        errors=errors,
        meta={
            'exact_keys': len(dictionary.exact_index),
            'normalized_keys': len(dictionary.normalized_index),
        },
    )


def validate_conflicts(dictionary: 'CompiledDictionary') -> ValidationResult:
    """
    Check the conflict table.

    Every group needs a key, at least two candidates, candidates that exist,
    and a default that is both an entry and one of the candidates. Entries
    that share a normalized original with different meanings but have no
    group are reported as warnings.
    """
    errors: List[str] = []
    warnings: List[str] = []
    entry_ids = {e.id for e in dictionary.entries}

    covered = set()
    for group in dictionary.conflicts:
        label = group.acronym_key or '<empty>'
        if not group.acronym_key:
            errors.append("Conflict group with empty acronym key")
        covered.add(normalize(group.acronym_key))

        if len(group.candidates) < 2:
            errors.append(f"Conflict {label}: fewer than two candidates")

        candidate_ids = [c.entry_id for c in group.candidates]
        for entry_id in candidate_ids:
            if entry_id not in entry_ids:
                errors.append(f"Conflict {label}: candidate references unknown id {entry_id}")

        if group.default_entry_id not in entry_ids:
            errors.append(f"Conflict {label}: default id {group.default_entry_id!r} is not an entry")
        elif group.default_entry_id not in candidate_ids:
            errors.append(f"Conflict {label}: default id {group.default_entry_id} is not a candidate")

    meanings_by_key: Dict[str, set] = {}
    for entry in dictionary.entries:
        meanings_by_key.setdefault(normalize(entry.original), set()).add(entry.meaning)
    for key, meanings in meanings_by_key.items():
        if len(meanings) > 1 and key not in covered:
            warnings.append(f"Acronym {key!r} has {len(meanings)} meanings but no conflict group")

    return ValidationResult(
        valid=not errors,
        errors=errors,
        warnings=warnings,
        meta={'conflicts': len(dictionary.conflicts)},
    )


def validate_dictionary(dictionary: 'CompiledDictionary') -> ValidationResult:
    """
    Run every integrity check on a compiled dictionary.

    Args:
        dictionary: Dictionary to check

    Returns:
        ValidationResult combining entry, index and conflict checks
    """
    errors: List[str] = []
    warnings: List[str] = []
    meta: Dict[str, Any] = {}

    for result in (
        validate_entries(dictionary),
        validate_index(dictionary),
        validate_conflicts(dictionary),
    ):
        errors.extend(result.errors)
        warnings.extend(result.warnings)
        meta.update(result.meta)

    return ValidationResult(valid=not errors, errors=errors, warnings=warnings, meta=meta)
