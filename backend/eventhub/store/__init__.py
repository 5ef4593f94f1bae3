from eventhub.core.config import Settings
from eventhub.store.base import Store
from eventhub.store.memory import MemoryStore


def build_store(settings: Settings) -> Store:
    """SQL backend when DATABASE_URL is configured, in-memory mock otherwise."""
    if settings.database_url:
        from eventhub.db.session import make_engine
        from eventhub.store.sql import SqlStore

        return SqlStore(make_engine(settings.database_url), create_tables=settings.auto_create_tables)
    return MemoryStore()


__all__ = ["Store", "MemoryStore", "build_store"]
