from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ==============================
    # Application
    # ==============================
    APP_NAME: str = "StockFlow Inventory API"
    ENVIRONMENT: str = "local"
    API_PREFIX: str = "/api"

    # ==============================
    # Database
    # ==============================
    DATABASE_URL: str = "sqlite:///./stockflow.db"
    CREATE_SCHEMA_ON_STARTUP: bool = True

    # ==============================
    # Logging
    # ==============================
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # ==============================
    # Stock alerts
    # ==============================
    SALES_LOOKBACK_DAYS: int = 60
    DEFAULT_LOW_STOCK_THRESHOLD: int = 10


@lru_cache
def get_settings() -> Settings:
    """Cached settings loader (once per process)."""
    return Settings()


__all__ = ["Settings", "get_settings"]
