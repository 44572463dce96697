"""
Core matching modules for legal-expand.
"""

from .normalizer import normalize, escape_for_regex, is_word_char, is_word_boundary
from .dictionary_loader import (
    load_dictionary,
    save_dictionary,
    CompiledDictionary,
    DictionaryEntry,
    ConflictGroup,
    ConflictCandidate,
    DictionaryError,
)
from .index import DictionaryIndex
from .matcher import (
    AcronymMatcher,
    MatchCandidate,
    OmittedCandidate,
    OmissionReason,
    ScanResult,
    ScanStats,
    AcronymSearchResult,
    DictionaryStats,
    get_matcher,
)
from .engine import (
    expand_acronyms,
    expand_acronyms_detailed,
    find_acronym,
    list_acronyms,
    dictionary_stats,
)

__all__ = [
    "normalize",
    "escape_for_regex",
    "is_word_char",
    "is_word_boundary",
    "load_dictionary",
    "save_dictionary",
    "CompiledDictionary",
    "DictionaryEntry",
    "ConflictGroup",
    "ConflictCandidate",
    "DictionaryError",
    "DictionaryIndex",
    "AcronymMatcher",
    "MatchCandidate",
    "OmittedCandidate",
    "OmissionReason",
    "ScanResult",
    "ScanStats",
    "AcronymSearchResult",
    "DictionaryStats",
    "get_matcher",
    "expand_acronyms",
    "expand_acronyms_detailed",
    "find_acronym",
    "list_acronyms",
    "dictionary_stats",
]
