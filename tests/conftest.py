"""
Shared fixtures for the legal-expand test suite.
"""

import pytest

from legal_expand import FormatterFactory, reset_config
from legal_expand.compiler import compile_rows
from legal_expand.core.matcher import AcronymMatcher


SAMPLE_ROWS = [
    ("AEAT", "Agencia Estatal de Administración Tributaria"),
    ("A.E.A.T.", "Agencia Estatal de Administración Tributaria"),
    ("BOE", "Boletín Oficial del Estado"),
    ("CE", "Constitución Española"),
    ("CE", "Comunidad Europea"),
    ("IVA", "Impuesto sobre el Valor Añadido"),
    ("art.", "artículo"),
    ("AT/EP", "Accidente de trabajo y enfermedad profesional"),
    ("II. EE.", "Impuestos Especiales"),
]


@pytest.fixture(autouse=True)
def clean_global_state():
    """Every test starts and ends with the built-in configuration."""
    builtin = set(FormatterFactory.list_formatters())
    reset_config()
    yield
    reset_config()
    for name in set(FormatterFactory.list_formatters()) - builtin:
        FormatterFactory.unregister_formatter(name)


@pytest.fixture
def sample_dictionary():
    return compile_rows(SAMPLE_ROWS)


@pytest.fixture
def sample_matcher(sample_dictionary):
    return AcronymMatcher(dictionary=sample_dictionary)
