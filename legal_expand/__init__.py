"""
Spanish Legal Acronym Expander

Detects Spanish legal acronyms (AEAT, BOE, art., LEC...) in free text and
expands them with their meaning, with support for plain text, HTML and
structured output, include/exclude filters and disambiguation of
acronyms with several meanings.

Based on a curated dictionary of Spanish legal and administrative acronyms.
"""

from .core.engine import (
    expand_acronyms,
    expand_acronyms_detailed,
    find_acronym,
    list_acronyms,
    dictionary_stats,
)
from .core.dictionary_loader import (
    load_dictionary,
    CompiledDictionary,
    DictionaryEntry,
    DictionaryError,
)
from .core.index import DictionaryIndex
from .core.matcher import AcronymMatcher, OmissionReason
from .config import (
    configure,
    get_global_config,
    reset_config,
    ExpansionOptions,
)
from .formatters import (
    Formatter,
    FormatterFactory,
    StructuredOutput,
    DiagnosticOutput,
    UnknownFormatError,
)

__version__ = "1.0.0"
__all__ = [
    "expand_acronyms",
    "expand_acronyms_detailed",
    "find_acronym",
    "list_acronyms",
    "dictionary_stats",
    "load_dictionary",
    "CompiledDictionary",
    "DictionaryEntry",
    "DictionaryError",
    "DictionaryIndex",
    "AcronymMatcher",
    "OmissionReason",
    "configure",
    "get_global_config",
    "reset_config",
    "ExpansionOptions",
    "Formatter",
    "FormatterFactory",
    "StructuredOutput",
    "DiagnosticOutput",
    "UnknownFormatError",
]
