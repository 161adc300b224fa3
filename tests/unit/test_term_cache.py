"""
Unit tests for the in-memory definition cache.
"""
import json

from react_dictionary.services.term_cache import TermCache, cache_key


def test_keys_are_case_and_whitespace_insensitive():
    cache = TermCache()
    cache.set("useState", {"term": "useState"})
    assert cache.has("  USESTATE ")
    assert cache.get("usestate") == {"term": "useState"}
    assert cache_key(" React.Memo ") == "react.memo"
    assert len(cache) == 1


def test_missing_term():
    cache = TermCache()
    assert cache.get("useEffect") is None
    assert not cache.has("useEffect")


def test_load_file(tmp_path):
    path = tmp_path / "terms.json"
    path.write_text(json.dumps([
        {"term": "useState", "purpose": "state"},
        {"term": "JSX", "purpose": "syntax"},
        {"purpose": "no term"},
    ]))
    cache = TermCache()
    assert cache.load_file(path) == 2
    assert cache.get("jsx")["purpose"] == "syntax"


def test_load_missing_file(tmp_path):
    assert TermCache().load_file(tmp_path / "missing.json") == 0


def test_load_malformed_file(tmp_path):
    path = tmp_path / "terms.json"
    path.write_text("{not json")
    cache = TermCache()
    assert cache.load_file(path) == 0
    assert len(cache) == 0


def test_load_file_requires_array(tmp_path):
    path = tmp_path / "terms.json"
    path.write_text(json.dumps({"term": "useState"}))
    assert TermCache().load_file(path) == 0


def test_load_file_skips_invalid_records(tmp_path):
    path = tmp_path / "terms.json"
    path.write_text(json.dumps([
        {"term": 123},
        "useEffect",
        {"term": "   "},
        {"term": "useState", "why": 5},
    ]))
    cache = TermCache()
    assert cache.load_file(path) == 1
    assert cache.has("usestate")
