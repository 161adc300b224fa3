"""
Autocomplete over known terms.

Scores follow the Fuse.js convention used by the search box: 0.0 is a
perfect match and 1.0 is no match at all.
"""
from difflib import SequenceMatcher
from typing import Any, Dict, List, Sequence

from react_dictionary.config import settings
from react_dictionary.schemas.terms import SearchResult, TermDefinition

MIN_QUERY_LENGTH = 2
# Penalty applied to partial (windowed) matches so whole-term matches rank first
PARTIAL_MATCH_PENALTY = 0.9


def _similarity(query: str, text: str) -> float:
    return SequenceMatcher(None, query, text).ratio()


def _partial_similarity(query: str, text: str) -> float:
    """Best similarity between the query and any same-length window of the text."""
    if len(query) >= len(text):
        return _similarity(query, text)
    if query in text:
        return 1.0
    width = len(query)
    return max(_similarity(query, text[i:i + width]) for i in range(len(text) - width + 1))


def match_score(query: str, term: str) -> float:
    query = query.strip().lower()
    term = term.strip().lower()
    if not query or not term:
        return 1.0
    if query == term:
        return 0.0
    full = _similarity(query, term)
    partial = _partial_similarity(query, term) * PARTIAL_MATCH_PENALTY
    return round(1.0 - max(full, partial), 4)


class TermSearcher:
    def __init__(self, records: Sequence[Dict[str, Any]], threshold: float = None, limit: int = None):
        self.records = list(records)
        self.threshold = settings.autocomplete_threshold if threshold is None else threshold
        self.limit = settings.autocomplete_limit if limit is None else limit

    def search(self, query: str) -> List[SearchResult]:
        if len(query.strip()) < MIN_QUERY_LENGTH:
            return []

        scored = []
        for index, record in enumerate(self.records):
            term = record.get("term")
            if not term:
                continue
            score = match_score(query, term)
            if score <= self.threshold:
                scored.append((score, index, record))

        scored.sort(key=lambda hit: (hit[0], hit[1]))
        return [
            SearchResult(item=TermDefinition.model_validate(record), refIndex=index, score=score)
            for score, index, record in scored[:self.limit]
        ]
