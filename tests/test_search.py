"""Tests for corpus search."""

from atlas.core.search import SearchIndex
from atlas.models.search_entry import SearchCorpusEntry


def _entry(name, entry_id, entry_type="City"):
    return SearchCorpusEntry(name=name, type=entry_type, id=str(entry_id))


CORPUS = [
    _entry("Winterfell", 1, "Castle"),
    _entry("Winter Town", 5, "Town"),
    _entry("Westerlands", 104, "Kingdom"),
    _entry("Winter", 9, "Landmark"),
    _entry("King's Landing", 3),
]


def test_exact_then_prefix_then_substring():
    index = SearchIndex(CORPUS)
    names = [e.name for e in index.search("winter")]
    assert names == ["Winter", "Winterfell", "Winter Town"]


def test_substring_match():
    index = SearchIndex(CORPUS)
    assert [e.name for e in index.search("landing")] == ["King's Landing"]


def test_case_and_whitespace_insensitive():
    index = SearchIndex(CORPUS)
    assert index.search("  WESTERLANDS ")[0].id == "104"


def test_limit():
    index = SearchIndex(CORPUS)
    assert len(index.search("w", limit=2)) == 2
    assert index.search("w", limit=0) == []


def test_empty_query():
    assert SearchIndex(CORPUS).search("") == []


def test_close_match_fallback():
    """Misspellings fall back to close matches."""
    index = SearchIndex(CORPUS)
    assert index.search("wintrfell")[0].name == "Winterfell"
    assert index.search("Westerlnds")[0].name == "Westerlands"


def test_no_match():
    assert SearchIndex(CORPUS).search("qqqq") == []


def test_index_over_loaded_corpus(loaded_context):
    results = loaded_context.search.search("dorne")
    assert len(results) == 1
    assert results[0].is_kingdom
    assert len(loaded_context.search) == len(loaded_context.corpus)
