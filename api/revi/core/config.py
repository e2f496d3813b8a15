from pydantic_settings import BaseSettings
from dotenv import load_dotenv
import logging
import os
from pathlib import Path

_logger = logging.getLogger(__name__)

# Load .env file explicitly before creating Settings.
# Variables already present in the environment win over the file.
api_dir = Path(__file__).parent.parent.parent
env_path = api_dir / ".env"

if env_path.exists():
    load_dotenv(env_path, override=False)
    _logger.info(f"Loaded .env file from: {env_path}")
else:
    # Fallback to current directory
    current_env = Path(".env")
    if current_env.exists():
        load_dotenv(current_env, override=False)
        _logger.info(f"Loaded .env file from: {current_env.absolute()}")


DEFAULT_FLASHCARD_MODELS = [
    "google/gemini-2.0-flash-exp:free",
    "meta-llama/llama-3.2-3b-instruct:free",
    "deepseek/deepseek-r1-distill-llama-70b:free",
    "nousresearch/hermes-3-llama-3.1-405b:free",
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database - the managed provider exposes DATABASE_URL (uppercase)
    database_url: str = ""

    # API
    api_prefix: str = "/api"
    environment: str = "production"

    # CORS
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    # Auth provider (token resolution and admin user deletion)
    auth_url: str = ""
    auth_anon_key: str = ""
    auth_service_role_key: str = ""
    auth_timeout_seconds: int = 10

    # LLM completion endpoint (OpenRouter-compatible)
    openrouter_api_key: str = ""
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    flashcard_models: list[str] = DEFAULT_FLASHCARD_MODELS
    llm_temperature: float = 0.3
    llm_timeout_seconds: int = 60
    llm_max_input_chars: int = 8000

    # Card generation / upload limits
    max_upload_bytes: int = 10 * 1024 * 1024
    default_num_cards: int = 10
    max_num_cards: int = 50
    min_text_length: int = 50

    class Config:
        env_file = ".env"
        case_sensitive = False

    def __init__(self, **kwargs):
        # Ensure we read DATABASE_URL from environment (the provider sets it uppercase)
        if not kwargs.get("database_url"):
            kwargs["database_url"] = os.getenv("DATABASE_URL", "")
        # The auth provider keys are commonly exported under the provider's own names
        if not kwargs.get("auth_url"):
            kwargs["auth_url"] = os.getenv("AUTH_URL", os.getenv("SUPABASE_URL", ""))
        if not kwargs.get("auth_anon_key"):
            kwargs["auth_anon_key"] = os.getenv("AUTH_ANON_KEY", os.getenv("SUPABASE_ANON_KEY", ""))
        if not kwargs.get("auth_service_role_key"):
            kwargs["auth_service_role_key"] = os.getenv(
                "AUTH_SERVICE_ROLE_KEY", os.getenv("SUPABASE_SERVICE_ROLE_KEY", "")
            )
        if not kwargs.get("openrouter_api_key"):
            kwargs["openrouter_api_key"] = os.getenv("OPENROUTER_API_KEY", "")
        super().__init__(**kwargs)

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in ("development", "dev", "local")


# Create settings instance
settings = Settings()

# Validate required DATABASE_URL
if not settings.database_url:
    raise ValueError("DATABASE_URL environment variable is required")
