"""
Unit tests for the define operation.
"""
import pytest
from unittest.mock import patch, AsyncMock

from react_dictionary.services.dictionary import define_term, DictionaryError, TermRequiredError
from react_dictionary.services.error_handler import error_handler

COMPLETE = "react_dictionary.services.llm_provider.complete"


@pytest.mark.asyncio
@pytest.mark.parametrize("term", ["", "   "])
async def test_term_required(term, cache):
    with pytest.raises(TermRequiredError) as exc_info:
        await define_term(term, cache=cache)
    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Term parameter is required"


@pytest.mark.asyncio
async def test_cache_hit_skips_llm(cache):
    cache.set("useState", {"term": "useState", "purpose": "cached"})
    with patch(COMPLETE, new_callable=AsyncMock) as mock_complete:
        record = await define_term("  USESTATE ", cache=cache)
    assert record["purpose"] == "cached"
    mock_complete.assert_not_called()


@pytest.mark.asyncio
async def test_not_configured(cache):
    with pytest.raises(DictionaryError) as exc_info:
        await define_term("useState", cache=cache)
    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "OpenAI API is not configured"
    assert error_handler.get_error_stats()["error_types"] == {"not_configured": 1}


@pytest.mark.asyncio
async def test_generates_and_caches(cache, openai_key, sample_response):
    with patch(COMPLETE, new_callable=AsyncMock, return_value=sample_response) as mock_complete:
        record = await define_term(" useState ", cache=cache)
        again = await define_term("usestate", cache=cache)

    assert mock_complete.await_count == 1
    prompt = mock_complete.call_args.args[0]
    assert '"useState"' in prompt
    assert record["term"] == "useState"
    assert record["createdAt"]
    assert record["why"][0] == "Keeps values between renders"
    assert "moderated" not in record
    assert again is record
    assert cache.has("USESTATE")


@pytest.mark.asyncio
async def test_parse_failure(cache, openai_key):
    with patch(COMPLETE, new_callable=AsyncMock, return_value="Sorry, I can't help with that."):
        with pytest.raises(DictionaryError) as exc_info:
            await define_term("useState", cache=cache)
    assert exc_info.value.message == "Failed to parse OpenAI response"
    assert not cache.has("useState")
    assert error_handler.get_error_stats()["error_types"] == {"parse_error": 1}


@pytest.mark.asyncio
async def test_provider_failure(cache, openai_key):
    with patch(COMPLETE, new_callable=AsyncMock, side_effect=TimeoutError("read timed out")):
        with pytest.raises(DictionaryError) as exc_info:
            await define_term("useState", cache=cache)
    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "An error occurred while processing your request"
    assert error_handler.recent_errors[-1]["details"] == "read timed out"


@pytest.mark.asyncio
async def test_invalid_field_types_are_parse_failures(cache, openai_key):
    reply = '{"purpose": "state", "why": 5, "moderated": "maybe"}'
    with patch(COMPLETE, new_callable=AsyncMock, return_value=reply):
        with pytest.raises(DictionaryError) as exc_info:
            await define_term("useState", cache=cache)
    assert exc_info.value.message == "Failed to parse OpenAI response"


@pytest.mark.asyncio
async def test_scalar_why_from_model(cache, openai_key):
    with patch(COMPLETE, new_callable=AsyncMock, return_value='{"purpose": "state", "why": 5}'):
        record = await define_term("useState", cache=cache)
    assert record["why"] == ["5"]
