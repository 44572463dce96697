"""
Dictionary compiler: source CSV -> CompiledDictionary.

Turns the authored list of Spanish legal acronyms (columns ``SIGLAS`` and
``SIGNIFICADO``) into the compiled form used at runtime:

1. Clean acronyms and meanings (whitespace, trailing period)
2. Group rows by a normalized acronym key
3. Generate matching variants for every acronym
4. Assign priorities (automatic rules + manual overrides, 0 = drop)
5. Build exact/normalized indices and conflict groups
"""

from __future__ import annotations

import csv
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from .core.dictionary_loader import (
    CompiledDictionary,
    ConflictCandidate,
    ConflictGroup,
    DictionaryEntry,
    DictionaryError,
)
from .core.normalizer import normalize

logger = logging.getLogger(__name__)


DICTIONARY_VERSION = "1.0.0"

ACRONYM_COLUMN = "SIGLAS"
MEANING_COLUMN = "SIGNIFICADO"

# Manual priorities for known duplicates: {original: {meaning: priority}}.
# Priority 0 removes the entry from the compiled dictionary.
MANUAL_PRIORITIES: Dict[str, Dict[str, int]] = {
    'IVTM': {
        'Impuesto sobre vehículos de tracción mecánica': 100,
        'Iimpuesto sobre vehículos de tracción mecánica': 100,
        'Impuesto de Arrendamientos Urbanos': 0,
    },
    'DGT': {
        'Dirección General de Tributos': 90,
        'Dirección General de Tráfico': 90,
    },
    'CE': {
        'Constitución Española': 100,
        'Comunidad Europea': 80,
    },
    'cfr.': {
        'confróntese': 100,
        'Confrontar': 95,
    },
    'DUA': {
        'Documento Unico Aduanero': 100,
        'documento único administrativo': 90,
    },
}

_WHITESPACE_RE = re.compile(r'\s+')


def clean_acronym(acronym: Optional[str]) -> Optional[str]:
    """Trim and collapse whitespace; None for empty values."""
    if not acronym or not isinstance(acronym, str):
        return None
    cleaned = _WHITESPACE_RE.sub(' ', acronym.replace('\t', ' ').strip())
    return cleaned or None


def clean_meaning(meaning: Optional[str]) -> Optional[str]:
    """Like :func:`clean_acronym`, also dropping one trailing period."""
    cleaned = clean_acronym(meaning)
    if cleaned and cleaned.endswith('.'):
        cleaned = cleaned[:-1].rstrip()
    return cleaned or None


def generate_variants(acronym: str) -> List[str]:
    """
    Generate every surface form that should match ``acronym``.

    Examples:
        "A.E.A.T." -> ["A.E.A.T.", "A.E.A.T", "AEAT"]
        "art."     -> ["art.", "art", "ART.", "ART", "Art.", "Art"]
        "AT/EP"    -> ["AT/EP", "ATEP", "AT", "EP"]
    """
    variants: List[str] = [acronym]

    def add(value: str) -> None:
        if value and value not in variants:
            variants.append(value)

    # With/without final period
    if acronym.endswith('.'):
        add(acronym[:-1])

    # With/without internal periods
    if '.' in acronym:
        add(acronym.replace('.', ''))

    # With/without internal spaces
    if ' ' in acronym:
        without_spaces = _WHITESPACE_RE.sub('', acronym)
        add(without_spaces)
        add(without_spaces.replace('.', ''))

    # Slash forms: "AT/EP", "CCom./CCo."
    if '/' in acronym:
        add(acronym.replace('/', ''))
        parts = [p.strip() for p in acronym.split('/')]
        if len(parts) == 2 and all(len(p) > 1 for p in parts):
            for part in parts:
                add(part)

    # Lowercase abbreviations also appear upper-cased and capitalised
    if acronym == acronym.lower() and '.' in acronym:
        for cased in (acronym.upper(), acronym[:1].upper() + acronym[1:]):
            add(cased)
            if cased.endswith('.'):
                add(cased[:-1])

    return variants


def normalize_for_grouping(acronym: str) -> str:
    """Grouping key for duplicate detection; keeps slashes distinct."""
    return normalize(acronym).replace('/', '-')


def calculate_priority(acronym: str, meaning: str) -> int:
    """Automatic priority used when no manual override exists."""
    priority = 100

    # Prefer short, readable meanings
    if len(meaning) < 50:
        priority += 10
    if len(meaning) > 150:
        priority -= 10

    if not re.search(r'[\\/]', acronym):
        priority += 5

    if acronym == acronym.upper() and len(acronym) > 1:
        priority += 5

    # Domain-specific boosts
    if 'Impuesto' in meaning:
        priority += 15
    if 'Ley' in meaning:
        priority += 10
    if 'Reglamento' in meaning:
        priority += 10
    if 'Real Decreto Legislativo' in meaning:
        priority -= 5

    return priority


def read_rows(csv_path: Path) -> List[Tuple[Optional[str], Optional[str]]]:
    """Read (acronym, meaning) pairs from the source CSV."""
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise DictionaryError(f"Source CSV not found: {csv_path}")

    with open(csv_path, 'r', encoding='utf-8-sig', newline='') as f:
        reader = csv.DictReader(f)
        fieldnames = [name.strip() for name in (reader.fieldnames or [])]
        if ACRONYM_COLUMN not in fieldnames or MEANING_COLUMN not in fieldnames:
            raise DictionaryError(
                f"{csv_path} must have columns {ACRONYM_COLUMN} and {MEANING_COLUMN}, "
                f"got {fieldnames}"
            )
        reader.fieldnames = fieldnames
        return [(row.get(ACRONYM_COLUMN), row.get(MEANING_COLUMN)) for row in reader]


def compile_rows(
    rows: Iterable[Tuple[Optional[str], Optional[str]]],
    manual_priorities: Optional[Dict[str, Dict[str, int]]] = None,
) -> CompiledDictionary:
    """
    Compile (acronym, meaning) rows into a CompiledDictionary.

    Rows in the same normalized group with the same meaning are merged into a
    single entry; distinct meanings produce a conflict group.
    """
    if manual_priorities is None:
        manual_priorities = MANUAL_PRIORITIES

    # group key -> meaning -> originals (first one is canonical)
    grouped: Dict[str, Dict[str, List[str]]] = {}
    skipped = 0

    for raw_acronym, raw_meaning in rows:
        acronym = clean_acronym(raw_acronym)
        meaning = clean_meaning(raw_meaning)
        if not acronym or not meaning:
            skipped += 1
            continue

        by_meaning = grouped.setdefault(normalize_for_grouping(acronym), {})
        originals = by_meaning.setdefault(meaning, [])
        if acronym not in originals:
            originals.append(acronym)

    entries: List[DictionaryEntry] = []
    conflicts: List[ConflictGroup] = []
    exact_index: Dict[str, List[str]] = {}
    normalized_index: Dict[str, List[str]] = {}
    excluded = 0
    counter = 1

    for by_meaning in grouped.values():
        group_entries: List[DictionaryEntry] = []
        acronym_key = next(iter(by_meaning.values()))[0]

        for meaning, originals in by_meaning.items():
            entry_id = f"entry-{counter:03d}"
            counter += 1
            original = originals[0]

            priority = calculate_priority(original, meaning)
            manual = manual_priorities.get(original, {})
            if meaning in manual:
                priority = manual[meaning]

            if priority == 0:
                excluded += 1
                logger.debug("Excluding %s (%s): priority 0", original, meaning)
                continue

            variants: List[str] = []
            for form in originals:
                for variant in generate_variants(form):
                    if variant not in variants:
                        variants.append(variant)

            entry = DictionaryEntry(
                id=entry_id,
                original=original,
                meaning=meaning,
                variants=variants,
                priority=priority,
            )
            group_entries.append(entry)

            for variant in variants:
                exact_index.setdefault(variant, []).append(entry_id)
                normalized_ids = normalized_index.setdefault(normalize(variant), [])
                if entry_id not in normalized_ids:
                    normalized_ids.append(entry_id)

        entries.extend(group_entries)

        if len(group_entries) > 1:
            ranked = sorted(group_entries, key=lambda e: -e.priority)
            conflicts.append(ConflictGroup(
                acronym_key=acronym_key,
                candidates=[
                    ConflictCandidate(entry_id=e.id, meaning=e.meaning, priority=e.priority)
                    for e in ranked
                ],
                default_entry_id=ranked[0].id,
            ))

    logger.info(
        "Compiled dictionary: %d entries, %d conflicts, %d skipped rows, %d excluded",
        len(entries), len(conflicts), skipped, excluded,
    )

    return CompiledDictionary(
        entries=entries,
        exact_index=exact_index,
        normalized_index=normalized_index,
        conflicts=conflicts,
        version=DICTIONARY_VERSION,
        build_date=datetime.now(timezone.utc).isoformat(),
    )


def compile_csv(csv_path: Path) -> CompiledDictionary:
    """Compile a source CSV file."""
    return compile_rows(read_rows(csv_path))
