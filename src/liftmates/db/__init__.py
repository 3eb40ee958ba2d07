"""Database layer for liftmates."""

from ..config import Settings, get_settings
from .engine import get_db_path, init_db
from .repositories import PartnerRepository, UserRepository, WorkoutRepository
from .rest_store import RestStore
from .sqlite_store import SQLiteStore
from .store import DataStore, Filter


def open_store(settings: Settings | None = None) -> DataStore:
    """Create the store configured in settings."""
    settings = settings or get_settings()
    if settings.store == "rest":
        return RestStore(base_url=settings.rest_url, api_key=settings.rest_api_key)
    if settings.store == "sqlite":
        return SQLiteStore(get_db_path(settings.data_dir))
    raise ValueError(f"Unknown store backend: {settings.store}")


__all__ = [
    "DataStore",
    "Filter",
    "get_db_path",
    "init_db",
    "open_store",
    "PartnerRepository",
    "RestStore",
    "SQLiteStore",
    "UserRepository",
    "WorkoutRepository",
]
