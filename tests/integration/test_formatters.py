"""
Tests for output formatters and the formatter registry.
"""

import json

import pytest

from legal_expand import (
    AcronymMatcher,
    Formatter,
    FormatterFactory,
    StructuredOutput,
    UnknownFormatError,
    expand_acronyms,
)
from legal_expand.compiler import compile_rows


class TestHtmlFormatter:
    """<abbr> output."""

    def test_abbr_markup(self):
        result = expand_acronyms("Publicado en el BOE", format='html')
        assert result == (
            'Publicado en el <abbr title="Boletín Oficial del Estado">BOE</abbr> '
            '(Boletín Oficial del Estado)'
        )

    def test_escapes_meaning(self):
        matcher = AcronymMatcher(dictionary=compile_rows([("XYZ", 'A & B <C> "D"')]))
        result = expand_acronyms("XYZ", format='html', matcher=matcher)
        escaped = "A &amp; B &lt;C&gt; &quot;D&quot;"
        assert result == f'<abbr title="{escaped}">XYZ</abbr> ({escaped})'

    def test_surrounding_text_untouched(self):
        assert expand_acronyms("<p>sin siglas</p>", format='html') == "<p>sin siglas</p>"


class TestStructuredFormatter:
    """StructuredOutput contents."""

    def test_stats(self):
        result = expand_acronyms("AEAT y IVA", format='structured')
        assert isinstance(result, StructuredOutput)
        assert result.stats.total_acronyms_found == 2
        assert result.stats.total_expanded == 2
        assert result.stats.ambiguous_not_expanded == 0

    def test_acronym_records(self):
        result = expand_acronyms("AEAT y IVA", format='structured')
        assert [a.acronym for a in result.acronyms] == ["AEAT", "IVA"]
        assert (result.acronyms[1].start, result.acronyms[1].end) == (7, 10)
        assert result.expanded_text.startswith("AEAT (Agencia Estatal")

    def test_ambiguous_record(self):
        result = expand_acronyms("la CE", format='structured', auto_resolve_duplicates=True)
        record = result.acronyms[0]
        assert record.has_multiple_meanings
        assert record.all_meanings == ["Constitución Española", "Comunidad Europea"]

    def test_ambiguous_not_expanded_stat(self):
        result = expand_acronyms("la CE y el BOE", format='structured')
        assert result.stats.total_acronyms_found == 2
        assert result.stats.total_expanded == 1
        assert result.stats.ambiguous_not_expanded == 1

    def test_to_json(self):
        data = json.loads(expand_acronyms("IVA", format='structured').to_json())
        assert data["acronyms"][0] == {
            "acronym": "IVA",
            "expansion": "Impuesto sobre el Valor Añadido",
            "position": {"start": 0, "end": 3},
            "has_multiple_meanings": False,
        }
        assert "Añadido" in expand_acronyms("IVA", format='structured').to_json()


class UpperFormatter(Formatter):
    name = "upper"

    def format(self, original_text, matches, stats=None):
        result = original_text
        for match in sorted(matches, key=lambda m: m.start, reverse=True):
            result = result[:match.start] + match.meaning.upper() + result[match.end:]
        return result


class TestFormatterFactory:
    """Registry lookups and custom formatters."""

    def test_builtin_formatters(self):
        assert {"plain", "html", "structured"} <= set(FormatterFactory.list_formatters())

    def test_unknown_format(self):
        with pytest.raises(UnknownFormatError, match="plain"):
            FormatterFactory.get_formatter("markdown")
        with pytest.raises(ValueError):
            expand_acronyms("AEAT", format="markdown")

    def test_custom_formatter(self):
        FormatterFactory.register_formatter("upper", UpperFormatter())
        assert expand_acronyms("el BOE", format="upper") == "el BOLETÍN OFICIAL DEL ESTADO"

    def test_register_rejects_non_formatter(self):
        with pytest.raises(TypeError):
            FormatterFactory.register_formatter("bad", object())
