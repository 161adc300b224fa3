"""
Test configuration and fixtures for React Dictionary.

This module provides common test fixtures and configuration for both unit and integration tests.
"""
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from jose import jwt

from react_dictionary import main
from react_dictionary.config import settings
from react_dictionary.services.error_handler import error_handler
from react_dictionary.services.llm_provider import PROVIDER_KEYS
from react_dictionary.services.local_store import LocalStore
from react_dictionary.services.term_cache import TermCache, term_cache

TEST_ADMIN_SECRET = "test-admin-secret"

SAMPLE_RESPONSE = """Here is the definition:
```json
{
  "purpose": "Adds state to a function component.",
  "why": ["Keeps values between renders", "Triggers re-renders on change", "Simple API"],
  "example": "A counter that increments when a button is clicked.",
  "code": "const [count, setCount] = useState(0);",
  "summary": "Use it whenever a component needs to remember something."
}
```"""


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Start every test without LLM keys and with a known admin secret."""
    for env_var in PROVIDER_KEYS.values():
        monkeypatch.delenv(env_var, raising=False)
    monkeypatch.delenv("LLM_PROVIDER", raising=False)
    monkeypatch.setattr(settings, "llm_provider", "")
    monkeypatch.setattr(settings, "admin_jwt_secret", TEST_ADMIN_SECRET)
    monkeypatch.setattr(settings, "admin_jwt_algorithm", "HS256")
    error_handler.reset()
    yield
    error_handler.reset()


@pytest.fixture
def openai_key(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "dummy_key_for_tests")


@pytest.fixture
def cache():
    return TermCache()


@pytest_asyncio.fixture
async def store(tmp_path):
    """A local store backed by a throwaway SQLite file."""
    local_store = LocalStore(f"sqlite+aiosqlite:///{tmp_path / 'store.db'}")
    await local_store.init()
    yield local_store
    await local_store.close()


@pytest.fixture
def client(tmp_path, monkeypatch):
    """Test client running the app lifespan against temporary data files."""
    monkeypatch.setattr(main, "local_store", LocalStore(f"sqlite+aiosqlite:///{tmp_path / 'app.db'}"))
    monkeypatch.setattr(settings, "terms_file", tmp_path / "terms.json")
    term_cache.clear()
    with TestClient(main.app) as test_client:
        yield test_client
    term_cache.clear()


@pytest.fixture
def sample_response():
    """A typical model reply: prose followed by a fenced JSON definition."""
    return SAMPLE_RESPONSE


def make_token(secret=TEST_ADMIN_SECRET, **claims):
    payload = {"sub": "tester", "role": "admin"}
    payload.update(claims)
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {make_token()}"}
