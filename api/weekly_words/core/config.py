from pydantic_settings import BaseSettings
from pathlib import Path
import logging

from dotenv import load_dotenv

_logger = logging.getLogger(__name__)

# Look for .env in api directory (parent of the package directory)
api_dir = Path(__file__).parent.parent.parent
env_path = api_dir / ".env"

if env_path.exists():
    load_dotenv(env_path, override=True)
    _logger.info(f"Loaded .env file from: {env_path}")
else:
    # Fallback to current directory
    current_env = Path(".env")
    if current_env.exists():
        load_dotenv(current_env, override=True)
        _logger.info(f"Loaded .env file from: {current_env.absolute()}")


ONE_WEEK_MS = 7 * 24 * 60 * 60 * 1000


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite:///./weekly_words.db"

    # API
    api_v1_prefix: str = "/api/v1"

    # CORS
    cors_origins: list[str] = ["*"]

    # WordsAPI (primary source, random word + definitions)
    words_api_key: str = ""
    words_api_url: str = "https://wordsapiv1.p.rapidapi.com/words/?random=true"

    # Merriam-Webster student dictionary (secondary source)
    webster_api_key: str = ""
    webster_api_url: str = "https://dictionaryapi.com/api/v3/references/sd4/json/"

    # Deck generation
    deck_size: int = 20
    generation_interval_ms: int = ONE_WEEK_MS
    request_timeout: float = 10.0
    max_acquisition_attempts: int = 100
    max_restarts: int = 5
    backoff_base: float = 1.0
    backoff_max: float = 300.0
    persist_max_attempts: int = 3

    # Scheduler
    scheduler_enabled: bool = True
    run_on_start: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def sqlalchemy_url(self) -> str:
        """Database URL with postgres:// rewritten to postgresql:// for SQLAlchemy."""
        if self.database_url.startswith("postgres://"):
            return self.database_url.replace("postgres://", "postgresql://", 1)
        return self.database_url


# Create settings instance
settings = Settings()

if not settings.words_api_key:
    _logger.warning("WORDS_API_KEY not configured. Deck generation requests will be rejected by WordsAPI.")
if not settings.webster_api_key:
    _logger.warning("WEBSTER_API_KEY not configured. Dictionary fallback requests will fail.")
