"""
Tests for DictionaryIndex lookups and load-time checks.
"""

import pytest

from legal_expand.core.dictionary_loader import (
    CompiledDictionary,
    ConflictCandidate,
    ConflictGroup,
    DictionaryEntry,
    DictionaryError,
)
from legal_expand.core.index import DictionaryIndex


@pytest.fixture
def index(sample_dictionary):
    return DictionaryIndex(sample_dictionary)


def make_dictionary(**overrides):
    entries = [
        DictionaryEntry(id="entry-001", original="XA", meaning="Uno", variants=["XA"]),
        DictionaryEntry(id="entry-002", original="XB", meaning="Dos", variants=["XB"]),
    ]
    data = dict(
        entries=entries,
        exact_index={"XA": ["entry-001"], "XB": ["entry-002"]},
        normalized_index={"xa": ["entry-001"], "xb": ["entry-002"]},
        conflicts=[],
    )
    data.update(overrides)
    return CompiledDictionary(**data)


class TestLookupTiers:
    """Exact, flexible and normalized lookups."""

    def test_exact(self, index):
        assert index.lookup("AEAT").meaning == "Agencia Estatal de Administración Tributaria"
        assert index.lookup("A.E.A.T.").original == "AEAT"

    def test_flexible(self, index):
        entry = index.lookup("A. E. A. T.")
        assert entry is not None
        assert entry.original == "AEAT"

    def test_case_sensitive_by_default(self, index):
        assert index.lookup("aeat") is None
        assert index.lookup("aeat", case_sensitive=False).original == "AEAT"

    def test_not_found(self, index):
        assert index.lookup("NOEXISTE", case_sensitive=False) is None
        assert index.lookup_ids("NOEXISTE") == []


class TestConflicts:
    """Multi-meaning acronyms."""

    def test_default_meaning(self, index):
        assert index.lookup("CE").meaning == "Constitución Española"

    def test_has_conflict(self, index):
        assert index.has_conflict("CE")
        assert index.has_conflict("C.E.")
        assert not index.has_conflict("AEAT")

    def test_all_meanings(self, index):
        assert index.all_meanings("CE") == ["Constitución Española", "Comunidad Europea"]
        assert index.all_meanings("BOE") == ["Boletín Oficial del Estado"]
        assert index.all_meanings("NOEXISTE") == []

    def test_fallback_to_first_id(self):
        index = DictionaryIndex(make_dictionary())
        entry = index.resolve_ids(["entry-002", "entry-001"], "ZZ")
        assert entry.id == "entry-002"

    def test_single_id(self):
        index = DictionaryIndex(make_dictionary())
        assert index.resolve_ids(["entry-001"], "anything").meaning == "Uno"
        assert index.resolve_ids([], "anything") is None


class TestLoadTimeFaults:
    """A broken dictionary never becomes usable."""

    def test_dangling_conflict_reference(self):
        dictionary = make_dictionary(conflicts=[
            ConflictGroup(
                acronym_key="XA",
                candidates=[
                    ConflictCandidate(entry_id="entry-001", meaning="Uno", priority=100),
                    ConflictCandidate(entry_id="entry-999", meaning="Fantasma", priority=90),
                ],
                default_entry_id="entry-001",
            )
        ])
        with pytest.raises(DictionaryError, match="entry-999"):
            DictionaryIndex(dictionary)

    def test_dangling_index_reference(self):
        dictionary = make_dictionary(exact_index={"XA": ["entry-404"]})
        with pytest.raises(DictionaryError, match="entry-404"):
            DictionaryIndex(dictionary)

    def test_duplicate_ids(self):
        entry = DictionaryEntry(id="entry-001", original="XA", meaning="Uno", variants=["XA"])
        dictionary = make_dictionary(
            entries=[entry, entry],
            exact_index={"XA": ["entry-001"]},
            normalized_index={"xa": ["entry-001"]},
        )
        with pytest.raises(DictionaryError, match="Duplicate"):
            DictionaryIndex(dictionary)

    def test_empty_variants(self):
        dictionary = make_dictionary(entries=[
            DictionaryEntry(id="entry-001", original="XA", meaning="Uno", variants=[]),
            DictionaryEntry(id="entry-002", original="XB", meaning="Dos", variants=["XB"]),
        ])
        with pytest.raises(DictionaryError, match="no variants"):
            DictionaryIndex(dictionary)


class TestIndexContents:
    """Variant listing used to build the scanner pattern."""

    def test_all_variants(self, index):
        variants = index.all_variants()
        assert len(variants) == len(set(variants))
        assert {"AEAT", "A.E.A.T.", "art.", "Art", "AT", "EP"} <= set(variants)

    def test_len(self, index, sample_dictionary):
        assert len(index) == len(sample_dictionary.entries)
