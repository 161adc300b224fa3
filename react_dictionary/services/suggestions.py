"""
User suggestions of missing terms.

A suggestion is kept as a pending record in the local store so an admin can
approve or reject it from the review page.
"""
from typing import Any, Dict, Optional

from react_dictionary.services.local_store import LocalStore
from react_dictionary.services.definitions import utc_now_iso

RECEIVED_MESSAGE = "Your suggestion has been received and will be reviewed"
TERM_REQUIRED_MESSAGE = "Term is required"


async def record_suggestion(store: LocalStore, term: str, details: Optional[str] = None) -> Dict[str, Any]:
    """
    Store a suggested term awaiting review.

    An already approved term is left untouched; any other existing record is
    flagged as suggested again with the new details.
    """
    term = term.strip()
    print(f"[suggestions] Term suggestion received: term={term!r}, details={details!r}")

    existing = await store.get_cached_term(term)
    if existing is not None and existing.get("moderated") is True:
        return existing

    record = dict(existing) if existing else {"term": term}
    record.update(
        suggested=True,
        moderated=False,
        details=details or "",
        createdAt=utc_now_iso(),
    )
    return await store.update_term(record)
