"""
In-memory cache of generated definitions.

Definitions are keyed by the lowercased, trimmed term so that "useState",
" usestate " and "USESTATE" share one entry.
"""
import json
from pathlib import Path
from typing import Dict, Iterator, Optional, Union

from pydantic import ValidationError

from react_dictionary.schemas.terms import TermDefinition


def cache_key(term: str) -> str:
    return term.strip().lower()


class TermCache:
    def __init__(self):
        self._terms: Dict[str, dict] = {}

    def get(self, term: str) -> Optional[dict]:
        return self._terms.get(cache_key(term))

    def set(self, term: str, record: dict) -> None:
        self._terms[cache_key(term)] = record

    def has(self, term: str) -> bool:
        return cache_key(term) in self._terms

    def clear(self) -> None:
        self._terms.clear()

    def values(self) -> Iterator[dict]:
        return iter(list(self._terms.values()))

    def __len__(self) -> int:
        return len(self._terms)

    def load_file(self, path: Union[str, Path]) -> int:
        """
        Preload definitions from a JSON array file.

        A missing file loads nothing. A malformed file is reported and
        ignored so the server can still start.

        Returns:
            Number of records loaded
        """
        path = Path(path)
        if not path.exists():
            print(f"[term_cache] No terms file at {path}, starting with an empty cache")
            return 0

        try:
            with open(path, "r", encoding="utf-8") as f:
                records = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            print(f"[term_cache] Error loading terms from file: {e}")
            return 0

        if not isinstance(records, list):
            print(f"[term_cache] Expected a JSON array in {path}, got {type(records).__name__}")
            return 0

        loaded = 0
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                print(f"[term_cache] Skipping entry {index}: not an object")
                continue
            try:
                definition = TermDefinition.model_validate(record)
            except ValidationError as e:
                print(f"[term_cache] Skipping entry {index}: {e.error_count()} invalid field(s)")
                continue
            if not definition.term.strip():
                continue
            self.set(record["term"], record)
            loaded += 1

        print(f"[term_cache] Loaded {loaded} terms from {path.name}")
        return loaded


# Global cache instance
term_cache = TermCache()
