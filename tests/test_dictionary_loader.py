"""
Tests for the compiled dictionary model, JSON form and loader.
"""

import json

import pytest

from legal_expand.core.dictionary_loader import (
    CompiledDictionary,
    DictionaryError,
    load_dictionary,
    save_dictionary,
)


class TestJsonRoundTrip:
    """to_json / from_json."""

    def test_round_trip(self, sample_dictionary):
        restored = CompiledDictionary.from_json(sample_dictionary.to_json())
        assert restored.entries == sample_dictionary.entries
        assert restored.conflicts == sample_dictionary.conflicts
        assert restored.exact_index == sample_dictionary.exact_index
        assert restored.build_date == sample_dictionary.build_date

    def test_wire_keys(self, sample_dictionary):
        data = json.loads(sample_dictionary.to_json())
        assert set(data) == {"version", "buildDate", "entries", "index", "conflicts"}
        assert set(data["entries"][0]) == {"id", "original", "significado", "variants", "priority"}
        assert set(data["conflicts"][0]) == {"sigla", "variants", "defaultId"}
        assert "Añadido" in sample_dictionary.to_json()

    def test_bundled_round_trip(self):
        dictionary = load_dictionary()
        restored = CompiledDictionary.from_json(dictionary.to_json())
        assert restored.entries == dictionary.entries
        assert restored.conflicts == dictionary.conflicts

    @pytest.mark.parametrize("payload", ["{not json", "[]", '{"entries": [{"id": "x"}]}'])
    def test_malformed(self, payload):
        with pytest.raises(DictionaryError):
            CompiledDictionary.from_json(payload)


class TestLoader:
    """Cached bundled dictionary and explicit paths."""

    def test_bundled_is_cached(self):
        assert load_dictionary() is load_dictionary()

    def test_force_reload(self):
        first = load_dictionary()
        reloaded = load_dictionary(force_reload=True)
        assert reloaded is not first
        assert reloaded.entries == first.entries

    def test_save_and_load_json(self, sample_dictionary, tmp_path):
        path = tmp_path / "nested" / "dictionary.json"
        save_dictionary(sample_dictionary, path)
        loaded = load_dictionary(json_path=path)
        assert loaded.entries == sample_dictionary.entries
        assert load_dictionary() is not loaded

    def test_csv_path(self, tmp_path):
        path = tmp_path / "siglas.csv"
        path.write_text("SIGLAS,SIGNIFICADO\nBOE,Boletín Oficial del Estado\n", encoding="utf-8")
        assert [e.original for e in load_dictionary(csv_path=path).entries] == ["BOE"]

    def test_missing_json(self, tmp_path):
        with pytest.raises(DictionaryError, match="not found"):
            load_dictionary(json_path=tmp_path / "missing.json")
