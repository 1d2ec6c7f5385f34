"""
Application Settings
Load from environment variables
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings from environment"""

    # ======================
    # Database
    # ======================
    DATABASE_URL: str = "sqlite+aiosqlite:///./dividend_planner.db"
    AUTO_CREATE_TABLES: bool = True

    # ======================
    # Application
    # ======================
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    # ======================
    # Price lookup
    # ======================
    PRICE_PROVIDER: str = "quote_api"
    PRICE_FALLBACK_PROVIDERS: List[str] = ["yfinance"]
    QUOTE_API_BASE_URL: str = "https://brapi.dev/api"
    QUOTE_API_TOKEN: Optional[str] = None
    PRICE_LOOKUP_TIMEOUT_SECONDS: float = 10.0
    PRICE_CACHE_TTL_SECONDS: int = 60
    YF_SYMBOL_SUFFIX: str = ".SA"

    # ======================
    # Remote sync
    # ======================
    REMOTE_SYNC_ENABLED: bool = False
    REMOTE_SYNC_URL: Optional[str] = None
    REMOTE_SYNC_AUTH_TOKEN: Optional[str] = None
    REMOTE_SYNC_KEY: str = "saves"
    REMOTE_SYNC_TIMEOUT_SECONDS: float = 15.0

    # ======================
    # Display
    # ======================
    CURRENCY_SYMBOL: str = "R$"

    # ======================
    # Pydantic v2 config
    # ======================
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="forbid",
    )


settings = Settings()
