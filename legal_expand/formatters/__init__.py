"""
Output formatters for legal-expand.

Formatters are looked up by name through FormatterFactory; custom ones can
be registered at runtime.
"""

from __future__ import annotations

from typing import Dict, List

from .base import Formatter
from .plain_text import PlainTextFormatter
from .html import HtmlFormatter
from .structured import (
    StructuredFormatter,
    StructuredOutput,
    DiagnosticOutput,
    ExpandedAcronym,
    OmittedAcronym,
    OutputStats,
)


class UnknownFormatError(ValueError):
    """Raised when an output format has no registered formatter."""


class FormatterFactory:
    """Registry of formatters by name."""

    _formatters: Dict[str, Formatter] = {
        'plain': PlainTextFormatter(),
        'html': HtmlFormatter(),
        'structured': StructuredFormatter(),
    }

    @classmethod
    def get_formatter(cls, name: str) -> Formatter:
        try:
            return cls._formatters[name]
        except KeyError:
            raise UnknownFormatError(
                f"Unknown format: {name!r}. Available formats: {', '.join(cls.list_formatters())}"
            ) from None

    @classmethod
    def register_formatter(cls, name: str, formatter: Formatter) -> None:
        """Register (or replace) a formatter under ``name``."""
        if not name:
            raise ValueError("Formatter name must not be empty")
        if not isinstance(formatter, Formatter):
            raise TypeError(f"Expected a Formatter, got {type(formatter).__name__}")
        cls._formatters[name] = formatter

    @classmethod
    def unregister_formatter(cls, name: str) -> None:
        cls._formatters.pop(name, None)

    @classmethod
    def list_formatters(cls) -> List[str]:
        return sorted(cls._formatters)


__all__ = [
    "Formatter",
    "FormatterFactory",
    "UnknownFormatError",
    "PlainTextFormatter",
    "HtmlFormatter",
    "StructuredFormatter",
    "StructuredOutput",
    "DiagnosticOutput",
    "ExpandedAcronym",
    "OmittedAcronym",
    "OutputStats",
]
