"""Application configuration via Pydantic Settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Global application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    # App
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # Inbound rate limiting (per client IP)
    RATE_LIMIT_WINDOW_SECONDS: int = 60
    RATE_LIMIT_MAX_REQUESTS: int = 10
    RATE_LIMIT_BLOCK_SECONDS: int = 60 * 10  # 10 minutes

    # Product cache
    CACHE_TTL_SECONDS: int = 60 * 30  # 30 minutes

    # Outbound product page fetch
    SCRAPER_TIMEOUT_SECONDS: float = 30.0
    SCRAPER_USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    )
    SCRAPER_ACCEPT_LANGUAGE: str = "en-US,en;q=0.5"
    SCRAPER_REFERER: str = "https://www.google.com/"

    # Frontend
    FRONTEND_URL: str = "http://localhost:3000"


settings = Settings()
