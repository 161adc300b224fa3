"""
Local persistence for React Dictionary.

This module stores the user's bookmarks, the locally cached definition
records and the recent-search history. Records are written with "put"
semantics: writing an id that already exists replaces the stored record.
"""
import re
import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine

from react_dictionary.config import settings

metadata = sa.MetaData()

bookmarks_table = sa.Table(
    "bookmarks",
    metadata,
    sa.Column("id", sa.String, primary_key=True),
    sa.Column("term", sa.String, nullable=False, unique=True),
    sa.Column("added_at", sa.String, nullable=False),
)

terms_table = sa.Table(
    "terms",
    metadata,
    sa.Column("id", sa.String, primary_key=True),
    sa.Column("term", sa.String, nullable=False, unique=True),
    sa.Column("created_at", sa.String),
    sa.Column("moderated", sa.Boolean),
    sa.Column("suggested", sa.Boolean),
    sa.Column("data", sa.Text, nullable=False),
)

recent_searches_table = sa.Table(
    "recent_searches",
    metadata,
    sa.Column("position", sa.Integer, primary_key=True, autoincrement=True),
    sa.Column("term", sa.String, nullable=False),
)

WHITESPACE_RUN = re.compile(r"\s+")


def term_id(term: str) -> str:
    """Record id for a term: lowercased, whitespace runs replaced by '-'."""
    return WHITESPACE_RUN.sub("-", term.lower())


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _row_to_term(row) -> Dict[str, Any]:
    record = json.loads(row.data)
    record["id"] = row.id
    record["term"] = row.term
    if row.created_at is not None:
        record["createdAt"] = row.created_at
    for flag in ("moderated", "suggested"):
        value = getattr(row, flag)
        if value is None:
            record.pop(flag, None)
        else:
            record[flag] = bool(value)
    return record


class LocalStore:
    def __init__(self, database_url: str = None, recent_limit: int = None):
        self.database_url = database_url or settings.database_url
        self.recent_limit = recent_limit or settings.recent_search_limit
        self.engine: Optional[AsyncEngine] = None

    async def init(self) -> None:
        """Open the engine and create missing tables."""
        if self.engine is None:
            self.engine = create_async_engine(self.database_url)
        async with self.engine.begin() as conn:
            await conn.run_sync(metadata.create_all)

    async def close(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()
            self.engine = None

    def _require_engine(self) -> AsyncEngine:
        if self.engine is None:
            raise RuntimeError("LocalStore.init() must be awaited before use")
        return self.engine

    # Bookmarks

    async def add_bookmark(self, term: str, bookmark_id: str = None) -> Dict[str, str]:
        bookmark = {
            "id": bookmark_id or term_id(term),
            "term": term,
            "addedAt": _now(),
        }
        async with self._require_engine().begin() as conn:
            await conn.execute(sa.delete(bookmarks_table).where(bookmarks_table.c.id == bookmark["id"]))
            await conn.execute(sa.insert(bookmarks_table).values(
                id=bookmark["id"], term=bookmark["term"], added_at=bookmark["addedAt"]
            ))
        return bookmark

    async def remove_bookmark(self, bookmark_id: str) -> bool:
        async with self._require_engine().begin() as conn:
            result = await conn.execute(sa.delete(bookmarks_table).where(bookmarks_table.c.id == bookmark_id))
        return result.rowcount > 0

    async def get_bookmarks(self) -> List[Dict[str, str]]:
        """All bookmarks, most recently added first."""
        query = sa.select(bookmarks_table).order_by(bookmarks_table.c.added_at.desc())
        async with self._require_engine().connect() as conn:
            rows = (await conn.execute(query)).all()
        return [{"id": row.id, "term": row.term, "addedAt": row.added_at} for row in rows]

    async def is_bookmarked(self, bookmark_id: str) -> bool:
        query = sa.select(bookmarks_table.c.id).where(bookmarks_table.c.id == bookmark_id)
        async with self._require_engine().connect() as conn:
            return (await conn.execute(query)).first() is not None

    # Cached terms

    async def _put_term(self, record: Dict[str, Any]) -> Dict[str, Any]:
        data = {k: v for k, v in record.items()
                if k not in ("id", "term", "createdAt", "moderated", "suggested")}
        async with self._require_engine().begin() as conn:
            await conn.execute(sa.delete(terms_table).where(terms_table.c.id == record["id"]))
            await conn.execute(sa.insert(terms_table).values(
                id=record["id"],
                term=record["term"],
                created_at=record.get("createdAt"),
                moderated=record.get("moderated"),
                suggested=record.get("suggested"),
                data=json.dumps(data),
            ))
        return record

    async def cache_term(self, term: str, definition: Dict[str, Any]) -> Dict[str, Any]:
        """Store a definition under the term's id, stamped with the current time."""
        record = dict(definition)
        record.update(id=term_id(term), term=term, createdAt=_now())
        return await self._put_term(record)

    async def update_term(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Replace a stored record, keeping its own id and createdAt."""
        record = dict(record)
        record.setdefault("id", term_id(record["term"]))
        return await self._put_term(record)

    async def get_cached_term(self, term: str) -> Optional[Dict[str, Any]]:
        return await self.get_term_by_id(term_id(term))

    async def get_term_by_id(self, record_id: str) -> Optional[Dict[str, Any]]:
        query = sa.select(terms_table).where(terms_table.c.id == record_id)
        async with self._require_engine().connect() as conn:
            row = (await conn.execute(query)).first()
        return _row_to_term(row) if row is not None else None

    async def get_all_cached_terms(self) -> List[Dict[str, Any]]:
        query = sa.select(terms_table).order_by(terms_table.c.id)
        async with self._require_engine().connect() as conn:
            rows = (await conn.execute(query)).all()
        return [_row_to_term(row) for row in rows]

    # Recent searches

    async def add_recent_search(self, term: str) -> List[str]:
        """Move a term to the front of the history, dropping case-insensitive duplicates."""
        term = term.strip()
        history = [t for t in await self.get_recent_searches() if t.lower() != term.lower()]
        history = [term] + history
        history = history[:self.recent_limit]

        async with self._require_engine().begin() as conn:
            await conn.execute(sa.delete(recent_searches_table))
            # Oldest first so the newest term gets the highest position
            for entry in reversed(history):
                await conn.execute(sa.insert(recent_searches_table).values(term=entry))
        return history

    async def get_recent_searches(self) -> List[str]:
        query = sa.select(recent_searches_table.c.term).order_by(recent_searches_table.c.position.desc())
        async with self._require_engine().connect() as conn:
            rows = (await conn.execute(query)).all()
        return [row.term for row in rows][:self.recent_limit]
