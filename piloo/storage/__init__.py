# Piloo: Entity Store
# build_storage() picks the backend from settings; get_storage() is the FastAPI dependency.

from typing import Optional

from piloo.config import settings
from piloo.storage.base import InvalidRecordError, Repository, Storage, StorageError  # noqa
from piloo.utils.logger import get_logger

logger = get_logger(__name__)

_storage: Optional[Storage] = None


def build_storage(backend: Optional[str] = None) -> Storage:
    backend = (backend or settings.STORAGE_BACKEND).lower()
    if backend == "memory":
        from piloo.storage.memory import MemoryStorage
        return MemoryStorage()
    if backend == "database":
        from piloo.database import SessionLocal, create_tables
        from piloo.storage.sql import DatabaseStorage
        create_tables()
        return DatabaseStorage(SessionLocal)
    raise ValueError(f"Unknown STORAGE_BACKEND '{backend}' (expected memory or database)")


def get_storage() -> Storage:
    """FastAPI dependency returning the process-wide store, built on first use."""
    global _storage
    if _storage is None:
        _storage = build_storage()
        logger.info(f"Entity store ready: {_storage.backend}")
    return _storage
