"""
Validation modules for legal-expand.
"""

from .validators import (
    validate_dictionary,
    validate_entries,
    validate_index,
    validate_conflicts,
    ValidationResult,
)

__all__ = [
    "validate_dictionary",
    "validate_entries",
    "validate_index",
    "validate_conflicts",
    "ValidationResult",
]
