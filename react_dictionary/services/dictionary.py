"""
Define operation for React Dictionary.

A lookup checks the in-memory cache first and only falls through to the
language model on a miss.
"""
from typing import Any, Dict

from react_dictionary.services.term_cache import term_cache, TermCache
from react_dictionary.services.definitions import generate_definition, DefinitionParseError
from react_dictionary.services.llm_provider import is_configured, LLMNotConfiguredError
from react_dictionary.services.error_handler import (
    error_handler, NOT_CONFIGURED, PARSE_ERROR, PROVIDER_ERROR
)


class DictionaryError(Exception):
    """Base error for the define operation, carrying an HTTP status."""

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class TermRequiredError(DictionaryError):
    def __init__(self):
        super().__init__("Term parameter is required", status_code=400)


async def define_term(term: str, cache: TermCache = term_cache) -> Dict[str, Any]:
    """
    Return the definition record for a term.

    Args:
        term: The term as typed by the user
        cache: Cache to consult and fill

    Returns:
        The definition record as a JSON-ready dict

    Raises:
        DictionaryError: With the status code and message to send back
    """
    if not term or not term.strip():
        raise TermRequiredError()

    term = term.strip()
    cached = cache.get(term)
    if cached is not None:
        return cached

    if not is_configured():
        error_handler.track_error(NOT_CONFIGURED, term)
        raise DictionaryError(error_handler.get_user_friendly_error(NOT_CONFIGURED))

    try:
        definition = await generate_definition(term, style="server")
    except DefinitionParseError as e:
        print(f"[define_term] Could not parse response for '{term}': {e}")
        error_handler.track_error(PARSE_ERROR, term, str(e))
        raise DictionaryError(error_handler.get_user_friendly_error(PARSE_ERROR))
    except LLMNotConfiguredError as e:
        error_handler.track_error(NOT_CONFIGURED, term, str(e))
        raise DictionaryError(error_handler.get_user_friendly_error(NOT_CONFIGURED))
    except Exception as e:
        print(f"[define_term] Error in /api/define: {type(e).__name__}: {str(e)}")
        error_handler.track_error(PROVIDER_ERROR, term, str(e))
        raise DictionaryError(error_handler.get_user_friendly_error(PROVIDER_ERROR))

    record = definition.to_json()
    cache.set(term, record)
    return record
