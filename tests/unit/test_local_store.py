"""
Unit tests for local persistence of bookmarks, cached terms and recent searches.
"""
import pytest

from react_dictionary.services.local_store import LocalStore, term_id


def test_term_id():
    assert term_id("useState") == "usestate"
    assert term_id("virtual  DOM") == "virtual-dom"
    assert term_id("key\tprop") == "key-prop"


@pytest.mark.asyncio
async def test_store_requires_init():
    with pytest.raises(RuntimeError):
        await LocalStore("sqlite+aiosqlite://").get_bookmarks()


@pytest.mark.asyncio
async def test_bookmark_lifecycle(store):
    bookmark = await store.add_bookmark("virtual DOM")
    assert bookmark["id"] == "virtual-dom"
    assert bookmark["addedAt"]

    assert await store.is_bookmarked("virtual-dom")
    assert await store.get_bookmarks() == [bookmark]

    assert await store.remove_bookmark("virtual-dom") is True
    assert not await store.is_bookmarked("virtual-dom")
    assert await store.remove_bookmark("virtual-dom") is False


@pytest.mark.asyncio
async def test_bookmarks_newest_first(store):
    await store.add_bookmark("useState")
    await store.add_bookmark("useEffect")
    await store.add_bookmark("JSX")
    assert [b["term"] for b in await store.get_bookmarks()] == ["JSX", "useEffect", "useState"]


@pytest.mark.asyncio
async def test_bookmark_put_replaces(store):
    first = await store.add_bookmark("useState")
    second = await store.add_bookmark("useState")
    bookmarks = await store.get_bookmarks()
    assert len(bookmarks) == 1
    assert bookmarks[0]["addedAt"] == second["addedAt"]
    assert second["addedAt"] >= first["addedAt"]


@pytest.mark.asyncio
async def test_cache_and_get_term(store):
    definition = {
        "term": "ignored",
        "purpose": "Adds state",
        "why": ["a", "b", "c"],
        "createdAt": "2000-01-01T00:00:00Z",
        "moderated": True,
    }
    record = await store.cache_term("use State", definition)
    assert record["id"] == "use-state"
    assert record["term"] == "use State"
    assert record["createdAt"] != "2000-01-01T00:00:00Z"

    stored = await store.get_cached_term("USE   state")
    assert stored["purpose"] == "Adds state"
    assert stored["why"] == ["a", "b", "c"]
    assert stored["moderated"] is True
    assert "suggested" not in stored


@pytest.mark.asyncio
async def test_update_term_keeps_created_at(store):
    record = await store.cache_term("JSX", {"purpose": "syntax"})
    record["moderated"] = True
    await store.update_term(record)
    stored = await store.get_term_by_id("jsx")
    assert stored["createdAt"] == record["createdAt"]
    assert stored["moderated"] is True


@pytest.mark.asyncio
async def test_get_all_cached_terms(store):
    await store.cache_term("useRef", {"purpose": "ref"})
    await store.cache_term("JSX", {"purpose": "syntax"})
    terms = await store.get_all_cached_terms()
    assert {t["term"] for t in terms} == {"useRef", "JSX"}
    assert await store.get_cached_term("useMemo") is None


@pytest.mark.asyncio
async def test_recent_searches_dedup_and_limit(store):
    for term in ["useState", "useEffect", "JSX", "useRef", "useMemo", "props"]:
        await store.add_recent_search(term)
    assert await store.get_recent_searches() == ["props", "useMemo", "useRef", "JSX", "useEffect"]

    history = await store.add_recent_search("usestate")
    assert history == ["usestate", "props", "useMemo", "useRef", "JSX"]

    history = await store.add_recent_search("JSX")
    assert history == ["JSX", "usestate", "props", "useMemo", "useRef"]
    assert await store.get_recent_searches() == history
