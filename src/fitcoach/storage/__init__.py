"""Key-value storage adapters."""

from .base import KeyValueStore, ReadResult, ReadStatus, StorageKeys
from .memory import InMemoryStore
from .sqlite import SQLiteStore
from ..config import Settings, get_settings


def create_store(settings: Settings | None = None) -> KeyValueStore:
    """Build the store selected by configuration."""
    settings = settings or get_settings()
    if settings.storage_backend == "memory":
        return InMemoryStore(namespace=settings.storage_namespace)
    return SQLiteStore(str(settings.db_path), namespace=settings.storage_namespace)


__all__ = [
    "InMemoryStore",
    "KeyValueStore",
    "ReadResult",
    "ReadStatus",
    "SQLiteStore",
    "StorageKeys",
    "create_store",
]
