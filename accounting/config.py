from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ==============================
    # Application
    # ==============================
    APP_NAME: str = "Contractor Accounting"
    ENVIRONMENT: str = "local"

    # ==============================
    # Database
    # ==============================
    # Unset selects the in-memory store.
    DATABASE_URL: Optional[str] = None
    DB_POOL_SIZE: int = 10
    DB_ISOLATION_LEVEL: Optional[str] = None

    # ==============================
    # Ledger
    # ==============================
    DESCRIPTION_LOCALE: str = "ar"

    # ==============================
    # Logging
    # ==============================
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False


@lru_cache
def get_settings() -> Settings:
    """Cached settings loader (once per process)."""
    return Settings()


__all__ = ["Settings", "get_settings"]
