"""
Admin review of locally cached terms.
"""
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from react_dictionary.services.local_store import LocalStore

ReviewFilter = Literal["all", "suggested", "moderated"]


class TermNotFoundError(LookupError):
    pass


def _created_timestamp(record: Dict[str, Any]) -> float:
    created_at = record.get("createdAt")
    if not created_at:
        return 0.0
    try:
        return datetime.fromisoformat(created_at.replace("Z", "+00:00")).timestamp()
    except ValueError:
        return 0.0


def sort_for_review(records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Suggested terms first, then newest first within each group."""
    return sorted(
        records,
        key=lambda r: (0 if r.get("suggested") else 1, -_created_timestamp(r))
    )


def filter_records(records: List[Dict[str, Any]], review_filter: ReviewFilter = "all") -> List[Dict[str, Any]]:
    if review_filter == "suggested":
        return [r for r in records if r.get("suggested") is True]
    if review_filter == "moderated":
        return [r for r in records if r.get("moderated") is True]
    return list(records)


async def list_for_review(store: LocalStore, review_filter: ReviewFilter = "all") -> List[Dict[str, Any]]:
    records = await store.get_all_cached_terms()
    return filter_records(sort_for_review(records), review_filter)


async def _set_state(store: LocalStore, record_id: str, moderated: bool) -> Dict[str, Any]:
    record: Optional[Dict[str, Any]] = await store.get_term_by_id(record_id)
    if record is None:
        raise TermNotFoundError(record_id)
    record["moderated"] = moderated
    record["suggested"] = False
    await store.update_term(record)
    print(f"[moderation] {'Approved' if moderated else 'Rejected'} term '{record['term']}'")
    return record


async def approve(store: LocalStore, record_id: str) -> Dict[str, Any]:
    return await _set_state(store, record_id, moderated=True)


async def reject(store: LocalStore, record_id: str) -> Dict[str, Any]:
    return await _set_state(store, record_id, moderated=False)
