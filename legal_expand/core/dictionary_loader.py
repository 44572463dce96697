"""
Compiled Dictionary Loader for legal-expand

Loads and manages the compiled dictionary of Spanish legal acronyms.
The compiled form carries the entries plus precomputed lookup indices:

- exact index:      variant            -> entry ids
- normalized index: normalized variant -> entry ids
- conflicts:        acronyms with two or more distinct meanings

The bundled dictionary is compiled from its CSV source once and cached for
the lifetime of the process; prebuilt JSON files can be loaded explicitly.
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


DATA_DIR = Path(__file__).resolve().parent.parent / "data"
DEFAULT_CSV_PATH = DATA_DIR / "siglas_legales.csv"


class DictionaryError(ValueError):
    """Raised when a compiled dictionary is malformed or cannot be loaded."""


@dataclass
class DictionaryEntry:
    """
    One (acronym form, meaning) pair.

    Attributes:
        id: Unique, stable identifier (e.g. "entry-001")
        original: Canonical surface form as authored ("A.E.A.T.", "art.")
        meaning: Expansion text without trailing period
        variants: Every surface form that should match this entry
        priority: Higher wins among entries sharing a normalized acronym
    """
    id: str
    original: str
    meaning: str
    variants: List[str] = field(default_factory=list)
    priority: int = 100


@dataclass
class ConflictCandidate:
    """One possible meaning of an ambiguous acronym."""
    entry_id: str
    meaning: str
    priority: int


@dataclass
class ConflictGroup:
    """
    Acronym that maps to several entries with different meanings.

    Attributes:
        acronym_key: Shared original surface form used for display
        candidates: Candidates sorted by descending priority
        default_entry_id: Entry chosen when auto-resolution is requested
    """
    acronym_key: str
    candidates: List[ConflictCandidate] = field(default_factory=list)
    default_entry_id: str = ""

    @property
    def meanings(self) -> List[str]:
        return [c.meaning for c in self.candidates]


@dataclass
class CompiledDictionary:
    """Immutable-by-convention compiled dictionary consumed by the core."""
    entries: List[DictionaryEntry] = field(default_factory=list)
    exact_index: Dict[str, List[str]] = field(default_factory=dict)
    normalized_index: Dict[str, List[str]] = field(default_factory=dict)
    conflicts: List[ConflictGroup] = field(default_factory=list)
    version: str = "1.0.0"
    build_date: str = ""

    def __len__(self) -> int:
        return len(self.entries)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON wire representation."""
        return {
            'version': self.version,
            'buildDate': self.build_date,
            'entries': [
                {
                    'id': e.id,
                    'original': e.original,
                    'significado': e.meaning,
                    'variants': list(e.variants),
                    'priority': e.priority,
                }
                for e in self.entries
            ],
            'index': {
                'exact': {k: list(v) for k, v in self.exact_index.items()},
                'normalized': {k: list(v) for k, v in self.normalized_index.items()},
            },
            'conflicts': [
                {
                    'sigla': c.acronym_key,
                    'variants': [
                        {
                            'id': cand.entry_id,
                            'significado': cand.meaning,
                            'priority': cand.priority,
                        }
                        for cand in c.candidates
                    ],
                    'defaultId': c.default_entry_id,
                }
                for c in self.conflicts
            ],
        }

    def to_json(self) -> str:
        """Export dictionary to JSON."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CompiledDictionary':
        """Build a dictionary from its JSON wire representation."""
        try:
            entries = [
                DictionaryEntry(
                    id=info['id'],
                    original=info['original'],
                    meaning=info['significado'],
                    variants=list(info.get('variants', [])),
                    priority=info.get('priority', 100),
                )
                for info in data['entries']
            ]
            index = data.get('index', {})
            conflicts = [
                ConflictGroup(
                    acronym_key=info['sigla'],
                    candidates=[
                        ConflictCandidate(
                            entry_id=v['id'],
                            meaning=v['significado'],
                            priority=v['priority'],
                        )
                        for v in info.get('variants', [])
                    ],
                    default_entry_id=info['defaultId'],
                )
                for info in data.get('conflicts', [])
            ]
        except (KeyError, TypeError) as e:
            raise DictionaryError(f"Malformed compiled dictionary: missing {e}") from e

        return cls(
            entries=entries,
            exact_index={k: list(v) for k, v in index.get('exact', {}).items()},
            normalized_index={k: list(v) for k, v in index.get('normalized', {}).items()},
            conflicts=conflicts,
            version=data.get('version', '1.0.0'),
            build_date=data.get('buildDate', ''),
        )

    @classmethod
    def from_json(cls, json_str: str) -> 'CompiledDictionary':
        """Load dictionary from JSON."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise DictionaryError(f"Compiled dictionary is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise DictionaryError("Compiled dictionary must be a JSON object")
        return cls.from_dict(data)


# Global cached dictionary instance
_cached_dictionary: Optional[CompiledDictionary] = None
_cache_lock = threading.Lock()


def load_dictionary(
    json_path: Optional[Path] = None,
    csv_path: Optional[Path] = None,
    force_reload: bool = False
) -> CompiledDictionary:
    """
    Load the compiled dictionary, using cache when possible.

    Only the bundled dictionary is cached; explicit paths are read fresh
    on every call.

    Args:
        json_path: Optional path to a prebuilt JSON dictionary file.
        csv_path: Optional source CSV to compile instead of the bundled one.
        force_reload: Rebuild the bundled dictionary even if cached.

    Returns:
        CompiledDictionary ready for indexing.

    Raises:
        DictionaryError: If the file is missing or malformed.
    """
    global _cached_dictionary

    if json_path is not None:
        return _read_json(Path(json_path))
    if csv_path is not None:
        return _compile(Path(csv_path))

    if _cached_dictionary is not None and not force_reload:
        return _cached_dictionary

    with _cache_lock:
        if _cached_dictionary is None or force_reload:
            _cached_dictionary = _compile(DEFAULT_CSV_PATH)
        return _cached_dictionary


def _read_json(json_path: Path) -> CompiledDictionary:
    if not json_path.exists():
        raise DictionaryError(f"Dictionary file not found: {json_path}")
    dictionary = CompiledDictionary.from_json(json_path.read_text(encoding='utf-8'))
    logger.info("Loaded compiled dictionary from %s (%d entries)", json_path, len(dictionary))
    return dictionary


def _compile(csv_path: Path) -> CompiledDictionary:
    # compiler imports this module's types
    from ..compiler import compile_csv

    return compile_csv(csv_path)


def save_dictionary(dictionary: CompiledDictionary, json_path: Path) -> None:
    """Save compiled dictionary to a JSON file for faster loading."""
    json_path = Path(json_path)
    json_path.parent.mkdir(parents=True, exist_ok=True)
    with open(json_path, 'w', encoding='utf-8') as f:
        f.write(dictionary.to_json())
    logger.info("Wrote compiled dictionary to %s", json_path)
