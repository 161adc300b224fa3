"""
Configuration for React Dictionary.

Settings are read from environment variables (a local .env file is honoured).
"""
import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

PROJECT_ROOT = Path(__file__).parent.parent


def _env_bool(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class AppSettings:
    # Service Info
    service_name: str = "react-dictionary"
    environment: str = os.getenv("ENVIRONMENT", "development")

    # Server
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", 3000))
    debug: bool = _env_bool("DEBUG")

    # LLM
    llm_provider: str = os.getenv("LLM_PROVIDER", "")
    openai_model: str = os.getenv("OPENAI_MODEL", "gpt-3.5-turbo")
    anthropic_model: str = os.getenv("ANTHROPIC_MODEL", "claude-3-haiku-20240307")
    mistral_model: str = os.getenv("MISTRAL_MODEL", "mistral-small-latest")
    deepseek_model: str = os.getenv("DEEPSEEK_MODEL", "deepseek-chat")
    deepseek_base_url: str = "https://api.deepseek.com/v1"
    model_temperature: float = float(os.getenv("MODEL_TEMPERATURE", 0.7))
    max_tokens: int = 1000
    llm_timeout: float = float(os.getenv("LLM_TIMEOUT", 60.0))

    # Data
    terms_file: Path = Path(os.getenv("TERMS_FILE", PROJECT_ROOT / "data" / "terms.json"))
    database_url: str = os.getenv(
        "DATABASE_URL",
        f"sqlite+aiosqlite:///{PROJECT_ROOT / 'react_dictionary.db'}"
    )
    static_dir: Path = PROJECT_ROOT / "static"

    # Admin auth
    admin_jwt_secret: str = os.getenv("ADMIN_JWT_SECRET", "")
    admin_jwt_algorithm: str = os.getenv("ADMIN_JWT_ALGORITHM", "HS256")

    # Search & history
    recent_search_limit: int = 5
    autocomplete_limit: int = 5
    autocomplete_threshold: float = 0.4

    # Preload script
    preload_delay_seconds: float = float(os.getenv("PRELOAD_DELAY", 1.0))


settings = AppSettings()
