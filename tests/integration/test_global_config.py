"""
Tests for global configuration applied through the public API.
"""

from legal_expand import StructuredOutput, configure, expand_acronyms, expand_acronyms_detailed


class TestGlobalEnable:
    """Global on/off switch and the local override."""

    def test_disabled_returns_input(self):
        configure(enabled=False)
        assert expand_acronyms("La AEAT") == "La AEAT"

    def test_force_expansion_overrides(self):
        configure(enabled=False)
        assert expand_acronyms("La AEAT", force_expansion=True).startswith("La AEAT (")

    def test_force_expansion_off(self):
        assert expand_acronyms("La AEAT", force_expansion=False) == "La AEAT"

    def test_disabled_structured_is_well_formed(self):
        configure(enabled=False)
        result = expand_acronyms("La AEAT", format='structured')
        assert isinstance(result, StructuredOutput)
        assert result.expanded_text == "La AEAT"
        assert result.acronyms == []
        assert result.stats.total_acronyms_found == 0

    def test_disabled_diagnostics(self):
        configure(enabled=False)
        output = expand_acronyms_detailed("La AEAT")
        assert output.acronyms == []
        assert output.omitted_acronyms == []


class TestGlobalDefaults:
    """Global default options and local precedence."""

    def test_global_format(self):
        configure(default_options={'format': 'html'})
        assert expand_acronyms("BOE").startswith("<abbr")

    def test_local_format_wins(self):
        configure(default_options={'format': 'html'})
        assert expand_acronyms("BOE", format='plain') == "BOE (Boletín Oficial del Estado)"

    def test_global_exclude(self):
        configure(default_options={'exclude': ['BOE']})
        assert expand_acronyms("BOE") == "BOE"

    def test_global_auto_resolve(self):
        configure(default_options={'auto_resolve_duplicates': True})
        assert expand_acronyms("la CE") == "la CE (Constitución Española)"
