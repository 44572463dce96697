"""
Global configuration for legal-expand.

A process-wide store holding:
- enabled: whether expansion runs at all
- default_options: defaults applied to every call

Per-call options are merged over it by precedence:
local option > global default > built-in default.
A ``None`` field always falls through to the next level.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional, Union

logger = logging.getLogger(__name__)


@dataclass
class ExpansionOptions:
    """
    Per-call expansion options. ``None`` means "use the default".

    Attributes:
        format: Output format name ('plain', 'html', 'structured', ...)
        force_expansion: True/False overrides the global enabled flag
        preserve_case: Match case-sensitively and keep the surface spelling
        auto_resolve_duplicates: Use the highest-priority meaning of ambiguous acronyms
        duplicate_resolution: Manual meaning per acronym, e.g. {'CE': 'Constitución Española'}
        expand_only_first: Expand only the first occurrence of each acronym
        exclude: Acronyms never expanded
        include: If set, only these acronyms are expanded
    """
    format: Optional[str] = None
    force_expansion: Optional[bool] = None
    preserve_case: Optional[bool] = None
    auto_resolve_duplicates: Optional[bool] = None
    duplicate_resolution: Optional[Dict[str, str]] = None
    expand_only_first: Optional[bool] = None
    exclude: Optional[List[str]] = None
    include: Optional[List[str]] = None


@dataclass
class ResolvedOptions:
    """Fully resolved options consumed by the matcher and formatters."""
    format: str = 'plain'
    preserve_case: bool = True
    auto_resolve_duplicates: bool = False
    duplicate_resolution: Dict[str, str] = field(default_factory=dict)
    expand_only_first: bool = False
    exclude: List[str] = field(default_factory=list)
    include: Optional[List[str]] = None


DEFAULT_OPTIONS: Dict[str, Any] = {
    'format': 'plain',
    'force_expansion': None,
    'preserve_case': True,
    'auto_resolve_duplicates': False,
    'duplicate_resolution': {},
    'expand_only_first': False,
    'exclude': [],
    'include': None,
}

OPTION_NAMES = tuple(f.name for f in fields(ExpansionOptions))


@dataclass
class GlobalConfig:
    """Snapshot of the global configuration."""
    enabled: bool = True
    default_options: Dict[str, Any] = field(
        default_factory=lambda: copy.deepcopy(DEFAULT_OPTIONS)
    )


# Global configuration instance
_config = GlobalConfig()


def options_to_dict(options: Union[ExpansionOptions, Mapping[str, Any], None]) -> Dict[str, Any]:
    if options is None:
        return {}
    if isinstance(options, ExpansionOptions):
        return {name: getattr(options, name) for name in OPTION_NAMES}

    unknown = sorted(set(options) - set(OPTION_NAMES))
    if unknown:
        raise ValueError(
            f"Unknown option(s): {', '.join(unknown)}. "
            f"Valid options: {', '.join(OPTION_NAMES)}"
        )
    return dict(options)


def configure(
    enabled: Optional[bool] = None,
    default_options: Union[ExpansionOptions, Mapping[str, Any], None] = None,
) -> None:
    """
    Update the global configuration.

    Only the given values change; ``None`` fields in ``default_options``
    are ignored so previous defaults are kept.

    Args:
        enabled: Enable or disable expansion globally
        default_options: New defaults (ExpansionOptions or a dict)

    Raises:
        ValueError: If ``default_options`` names an unknown option
    """
    updates = options_to_dict(default_options)

    if enabled is not None:
        _config.enabled = bool(enabled)
    for name, value in updates.items():
        if value is not None:
            _config.default_options[name] = copy.deepcopy(value)

    logger.debug("Global config updated: enabled=%s, defaults=%s",
                 _config.enabled, _config.default_options)


def get_global_config() -> GlobalConfig:
    """Return a copy of the current global configuration."""
    return copy.deepcopy(_config)


def reset_config() -> None:
    """Restore the built-in defaults."""
    global _config
    _config = GlobalConfig()


def should_expand(options: Union[ExpansionOptions, Mapping[str, Any], None] = None) -> bool:
    """A local ``force_expansion`` wins over the global enabled flag."""
    force = options_to_dict(options).get('force_expansion')
    if force is not None:
        return bool(force)
    return _config.enabled


def merge_options(options: Union[ExpansionOptions, Mapping[str, Any], None] = None) -> ResolvedOptions:
    """Merge local options over global and built-in defaults."""
    local = options_to_dict(options)
    merged: Dict[str, Any] = {}

    for name in OPTION_NAMES:
        if name == 'force_expansion':
            continue
        value = local.get(name)
        if value is None:
            value = _config.default_options.get(name)
        if value is None:
            value = DEFAULT_OPTIONS[name]
        merged[name] = copy.deepcopy(value)

    return ResolvedOptions(
        format=merged['format'],
        preserve_case=bool(merged['preserve_case']),
        auto_resolve_duplicates=bool(merged['auto_resolve_duplicates']),
        duplicate_resolution=dict(merged['duplicate_resolution']),
        expand_only_first=bool(merged['expand_only_first']),
        exclude=list(merged['exclude']),
        include=list(merged['include']) if merged['include'] is not None else None,
    )
