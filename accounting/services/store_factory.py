import logging
from functools import lru_cache
from typing import Optional

from accounting.config import Settings, get_settings
from accounting.core.errors import StorageUnavailableError
from accounting.database.engine import create_db_engine
from accounting.services.memory_store import MemoryAccountingStore
from accounting.services.sql_store import SqlAccountingStore
from accounting.services.store import AccountingStore

logger = logging.getLogger(__name__)


def build_store(settings: Optional[Settings] = None) -> AccountingStore:
    """Pick the relational store when DATABASE_URL is set, memory otherwise."""
    settings = settings or get_settings()
    if not settings.DATABASE_URL:
        logger.info("DATABASE_URL not set; using in-memory accounting store")
        return MemoryAccountingStore(locale=settings.DESCRIPTION_LOCALE)

    try:
        engine = create_db_engine(
            settings.DATABASE_URL,
            pool_size=settings.DB_POOL_SIZE,
            isolation_level=settings.DB_ISOLATION_LEVEL,
        )
    except Exception as exc:
        raise StorageUnavailableError(f"Cannot create database engine: {exc}") from exc

    logger.info("Using relational accounting store (%s)", engine.url.get_backend_name())
    return SqlAccountingStore.from_engine(engine, locale=settings.DESCRIPTION_LOCALE)


@lru_cache
def get_store() -> AccountingStore:
    """Process-wide store, built once from the cached settings."""
    return build_store()


__all__ = ["build_store", "get_store"]
