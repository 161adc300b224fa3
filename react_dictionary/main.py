"""
Main application module for React Dictionary.

This module defines the FastAPI application, routes, and middleware.
"""
from contextlib import asynccontextmanager
from typing import Dict, List, Optional

from fastapi import FastAPI, Depends, HTTPException, Query
from fastapi.staticfiles import StaticFiles
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse

from react_dictionary.auth import require_admin
from react_dictionary.config import settings
from react_dictionary.schemas.requests import (
    BookmarkCreate, BookmarkItem, RecentSearchCreate, SuggestionRequest, SuggestionResponse
)
from react_dictionary.schemas.terms import SearchResult, TermDefinition
from react_dictionary.services import moderation
from react_dictionary.services.dictionary import define_term, DictionaryError
from react_dictionary.services.error_handler import error_handler, INTERNAL_ERROR
from react_dictionary.services.fuzzy_search import TermSearcher
from react_dictionary.services.llm_provider import is_configured
from react_dictionary.services.local_store import LocalStore, term_id
from react_dictionary.services.suggestions import (
    record_suggestion, RECEIVED_MESSAGE, TERM_REQUIRED_MESSAGE
)
from react_dictionary.services.term_cache import term_cache, TermCache

STATIC_DIR = settings.static_dir
INDEX_HTML_PATH = STATIC_DIR / "index.html"
ADMIN_HTML_PATH = STATIC_DIR / "admin.html"

local_store = LocalStore()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if is_configured():
        print("[startup] LLM provider configured")
    else:
        print("[startup] Warning: no LLM API key found. Definitions will not work.")
    term_cache.load_file(settings.terms_file)
    await local_store.init()
    yield
    await local_store.close()


# Create FastAPI app
app = FastAPI(
    title="React Dictionary",
    description="Plain-language explanations of React terms",
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_store() -> LocalStore:
    return local_store


def get_term_cache() -> TermCache:
    return term_cache


# Mount static files directory
app.mount("/static", StaticFiles(directory=str(STATIC_DIR), check_dir=False), name="static")


def _page(path):
    if not path.exists():
        raise HTTPException(status_code=500, detail=f"Page not found at {path}")
    return FileResponse(str(path))


@app.get("/")
async def root():
    """Serve the dictionary page."""
    return _page(INDEX_HTML_PATH)


@app.get("/admin")
async def admin_page():
    """Serve the admin review page."""
    return _page(ADMIN_HTML_PATH)


@app.get("/ping")
@app.head("/ping")
async def ping():
    """Health check endpoint. Supports both GET and HEAD methods."""
    return {"status": "ok"}


@app.get("/api/define")
async def define(
    term: Optional[str] = Query(None),
    cache: TermCache = Depends(get_term_cache)
):
    """
    Look up the definition of a React term.

    Cached definitions are returned directly; anything else is generated by
    the configured LLM and cached for later requests.
    """
    try:
        return await define_term(term or "", cache=cache)
    except DictionaryError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@app.post("/api/suggest", response_model=SuggestionResponse)
async def suggest(
    request: SuggestionRequest,
    store: LocalStore = Depends(get_store)
):
    """Record a user suggestion for a missing term."""
    if not request.term or not request.term.strip():
        return JSONResponse(
            status_code=400,
            content={"success": False, "message": TERM_REQUIRED_MESSAGE}
        )
    try:
        await record_suggestion(store, request.term, request.details)
    except Exception as e:
        print(f"Error in /api/suggest: {type(e).__name__}: {str(e)}")
        error_handler.track_error(INTERNAL_ERROR, request.term.strip(), str(e))
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "An error occurred while processing your request"}
        )
    return SuggestionResponse(success=True, message=RECEIVED_MESSAGE)


@app.get("/api/search", response_model=List[SearchResult])
async def search(
    q: str = Query(""),
    store: LocalStore = Depends(get_store),
    cache: TermCache = Depends(get_term_cache)
):
    """Autocomplete over locally cached terms and the server cache."""
    records = await store.get_all_cached_terms()
    seen = {record["id"] for record in records}
    for record in cache.values():
        record_id = term_id(record["term"])
        if record_id not in seen:
            seen.add(record_id)
            records.append(record)
    return TermSearcher(records).search(q)


# Bookmarks

@app.get("/api/bookmarks", response_model=List[BookmarkItem])
async def list_bookmarks(store: LocalStore = Depends(get_store)):
    return await store.get_bookmarks()


@app.post("/api/bookmarks", response_model=BookmarkItem, status_code=201)
async def add_bookmark(request: BookmarkCreate, store: LocalStore = Depends(get_store)):
    if not request.term.strip():
        raise HTTPException(status_code=400, detail="Term is required")
    return await store.add_bookmark(request.term.strip())


@app.get("/api/bookmarks/{bookmark_id}")
async def get_bookmark_status(bookmark_id: str, store: LocalStore = Depends(get_store)) -> Dict[str, bool]:
    return {"bookmarked": await store.is_bookmarked(bookmark_id)}


@app.delete("/api/bookmarks/{bookmark_id}")
async def remove_bookmark(bookmark_id: str, store: LocalStore = Depends(get_store)):
    removed = await store.remove_bookmark(bookmark_id)
    return {"removed": removed}


# Locally cached terms

@app.get("/api/terms")
async def list_cached_terms(store: LocalStore = Depends(get_store)):
    return await store.get_all_cached_terms()


@app.put("/api/terms")
async def cache_term(definition: TermDefinition, store: LocalStore = Depends(get_store)):
    """Keep a looked-up definition in the local store."""
    return await store.cache_term(definition.term, definition.to_json())


@app.get("/api/terms/{record_id}")
async def get_cached_term(record_id: str, store: LocalStore = Depends(get_store)):
    record = await store.get_term_by_id(record_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"No cached term with id '{record_id}'")
    return record


# Recent searches

@app.get("/api/recent-searches")
async def list_recent_searches(store: LocalStore = Depends(get_store)) -> List[str]:
    return await store.get_recent_searches()


@app.post("/api/recent-searches")
async def add_recent_search(request: RecentSearchCreate, store: LocalStore = Depends(get_store)) -> List[str]:
    if not request.term.strip():
        raise HTTPException(status_code=400, detail="Term is required")
    return await store.add_recent_search(request.term)


# Admin

@app.get("/api/admin/terms")
async def review_terms(
    filter: moderation.ReviewFilter = Query("all"),
    store: LocalStore = Depends(get_store),
    admin: str = Depends(require_admin)
):
    """List cached terms for review: suggested first, newest first."""
    return await moderation.list_for_review(store, filter)


@app.post("/api/admin/terms/{record_id}/approve")
async def approve_term(
    record_id: str,
    store: LocalStore = Depends(get_store),
    admin: str = Depends(require_admin)
):
    try:
        return await moderation.approve(store, record_id)
    except moderation.TermNotFoundError:
        raise HTTPException(status_code=404, detail=f"No cached term with id '{record_id}'")


@app.post("/api/admin/terms/{record_id}/reject")
async def reject_term(
    record_id: str,
    store: LocalStore = Depends(get_store),
    admin: str = Depends(require_admin)
):
    try:
        return await moderation.reject(store, record_id)
    except moderation.TermNotFoundError:
        raise HTTPException(status_code=404, detail=f"No cached term with id '{record_id}'")


@app.get("/api/admin/errors")
async def error_stats(admin: str = Depends(require_admin)):
    return error_handler.get_error_stats()
