"""
Expansion Engine

Public entry points of legal-expand:

- expand_acronyms: expand text in the requested output format
- expand_acronyms_detailed: same, plus every omitted candidate
- find_acronym / list_acronyms / dictionary_stats: dictionary queries

Options are merged over the global configuration before scanning; the
scan itself is delegated to the matcher and the rendering to a formatter.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from .matcher import (
    AcronymMatcher,
    AcronymSearchResult,
    DictionaryStats,
    get_matcher,
)
from ..config import (
    ExpansionOptions,
    merge_options,
    options_to_dict,
    should_expand,
)
from ..formatters import (
    DiagnosticOutput,
    FormatterFactory,
    OmittedAcronym,
    StructuredFormatter,
    StructuredOutput,
)

logger = logging.getLogger(__name__)

OptionsLike = Union[ExpansionOptions, Mapping[str, Any], None]


def _local_options(options: OptionsLike, overrides: Dict[str, Any]) -> Dict[str, Any]:
    local = options_to_dict(options)
    local.update(options_to_dict(overrides))
    return local


def expand_acronyms(
    text: str,
    options: OptionsLike = None,
    *,
    matcher: Optional[AcronymMatcher] = None,
    **overrides: Any,
) -> Union[str, StructuredOutput, Any]:
    """
    Expand the legal acronyms found in ``text``.

    Args:
        text: Input text
        options: ExpansionOptions or a dict of option names
        matcher: Matcher to use instead of the bundled-dictionary one
        **overrides: Individual options, applied over ``options``

    Returns:
        A string for text formats ('plain', 'html'), a StructuredOutput
        for 'structured', or whatever a registered custom formatter returns

    Raises:
        TypeError: If ``text`` is not a string
        ValueError: For unknown option names
        UnknownFormatError: If the format has no registered formatter

    Examples:
        >>> expand_acronyms("La AEAT gestiona el IVA")
        'La AEAT (Agencia Estatal de Administración Tributaria) gestiona el IVA (Impuesto sobre el Valor Añadido)'
    """
    if not isinstance(text, str):
        raise TypeError(f"text must be a string, got {type(text).__name__}")

    local = _local_options(options, overrides)
    resolved = merge_options(local)

    if not should_expand(local):
        logger.debug("Expansion disabled, returning text unchanged")
        if resolved.format == 'structured':
            return StructuredOutput.empty(text)
        return text

    formatter = FormatterFactory.get_formatter(resolved.format)
    scan = (matcher or get_matcher()).scan(text, resolved)
    logger.debug(
        "Expanded %d of %d acronyms (%d ambiguous)",
        scan.stats.total_expanded, scan.stats.total_found, scan.stats.ambiguous_not_expanded,
    )
    return formatter.format(text, scan.matches, scan.stats)


def expand_acronyms_detailed(
    text: str,
    options: OptionsLike = None,
    *,
    matcher: Optional[AcronymMatcher] = None,
    **overrides: Any,
) -> DiagnosticOutput:
    """
    Expand ``text`` and report why each recognised candidate was skipped.

    The output format option is ignored; the result is always structured.
    """
    if not isinstance(text, str):
        raise TypeError(f"text must be a string, got {type(text).__name__}")

    local = _local_options(options, overrides)
    if not should_expand(local):
        return DiagnosticOutput(original_text=text, expanded_text=text)

    resolved = merge_options(local)
    scan = (matcher or get_matcher()).scan(text, resolved)
    structured = StructuredFormatter().format(text, scan.matches, scan.stats)

    return DiagnosticOutput(
        original_text=structured.original_text,
        expanded_text=structured.expanded_text,
        acronyms=structured.acronyms,
        stats=structured.stats,
        omitted_acronyms=[
            OmittedAcronym(
                acronym=o.surface_text,
                start=o.start,
                end=o.end,
                reason=o.reason.value,
                details=o.details,
            )
            for o in scan.omitted
        ],
    )


def find_acronym(
    acronym: str,
    *,
    matcher: Optional[AcronymMatcher] = None,
) -> Optional[AcronymSearchResult]:
    """
    Look up one acronym.

    Examples:
        >>> find_acronym('CE').meanings
        ['Constitución Española', 'Comunidad Europea']
        >>> find_acronym('NOEXISTE') is None
        True
    """
    return (matcher or get_matcher()).find_acronym(acronym)


def list_acronyms(*, matcher: Optional[AcronymMatcher] = None) -> List[str]:
    """Original forms of every acronym in the dictionary."""
    return (matcher or get_matcher()).list_acronyms()


def dictionary_stats(*, matcher: Optional[AcronymMatcher] = None) -> DictionaryStats:
    return (matcher or get_matcher()).dictionary_stats()
