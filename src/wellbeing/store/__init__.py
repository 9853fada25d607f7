"""
Store

Generic key-filtered data access. A store knows tables and columns, not
entries or definitions; repositories map rows to domain objects.
"""

from wellbeing.config import Config
from wellbeing.store.base import Store
from wellbeing.store.memory import InMemoryStore
from wellbeing.store.postgres import PostgresStore
from wellbeing.store.schema import DEFINITIONS, ENTRIES, VALUES


def create_store(config: Config) -> Store:
    """Pick the store implementation the configuration asks for."""
    if config.use_in_memory_db:
        return InMemoryStore()
    if not config.database_url:
        raise ValueError("DATABASE_URL must be set unless USE_IN_MEMORY_DB is enabled")
    return PostgresStore()


__all__ = [
    "DEFINITIONS",
    "ENTRIES",
    "InMemoryStore",
    "PostgresStore",
    "Store",
    "VALUES",
    "create_store",
]
