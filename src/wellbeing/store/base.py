"""
Store contract.

A store runs four primitives against a named table using column-name/value
dictionaries: insert a row, delete matching rows, select matching rows and
select every row. Filters are conjunctive equality matches; text compares
case-insensitively and dates compare by calendar day.

There are no transactions. Each primitive is atomic on its own; upsert is
the only multi-step write and is serialized per key within the process.
"""

import logging
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any

from wellbeing.store.normalize import match_key
from wellbeing.store.schema import Table, get_table

logger = logging.getLogger(__name__)


class KeyedLock:
    """One lock per key, created on demand and dropped once no thread uses it."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[Any, list] = {}

    @contextmanager
    def hold(self, key):
        with self._guard:
            slot = self._locks.setdefault(key, [threading.Lock(), 0])
            slot[1] += 1
        try:
            with slot[0]:
                yield
        finally:
            with self._guard:
                slot[1] -= 1
                if slot[1] == 0:
                    del self._locks[key]

    def __len__(self):
        return len(self._locks)


class Store(ABC):
    """Abstract backing store."""

    def __init__(self):
        self._key_locks = KeyedLock()

    @abstractmethod
    def insert(self, table: str, columns: dict[str, Any]) -> None:
        """Append one row. Columns left out take the store default."""

    @abstractmethod
    def delete(self, table: str, filters: dict[str, Any]) -> int:
        """Remove every row matching all filters. Returns the number removed."""

    @abstractmethod
    def select(self, table: str, filters: dict[str, Any]) -> list:
        """Return every row matching all filters, as the table's row struct."""

    @abstractmethod
    def select_all(self, table: str) -> list:
        """Return every row in the table."""

    def upsert(self, table: str, columns: dict[str, Any]) -> None:
        """
        Write one row, replacing any row that shares its key.

        This fallback checks then writes under an in-process lock for the key.
        Stores with a native upsert primitive override it.
        """
        table_def = get_table(table)
        key_filters = self._key_filters(table_def, columns)
        lock_key = (table_def.name,) + tuple(
            match_key(table_def.kind(column), value) for column, value in key_filters.items()
        )

        with self._key_locks.hold(lock_key):
            if self.select(table, key_filters):
                self.delete(table, key_filters)
            self.insert(table, columns)

    @staticmethod
    def _key_filters(table_def: Table, columns: dict[str, Any]) -> dict[str, Any]:
        missing = [column for column in table_def.key if column not in columns]
        if missing:
            raise ValueError(f"Upsert into {table_def.name} is missing key columns: {missing}")
        return {column: columns[column] for column in table_def.key}

    @staticmethod
    def _check_delete_filters(table_def: Table, filters: dict[str, Any]) -> None:
        if not filters:
            raise ValueError(f"Refusing to delete from {table_def.name} without filters")
        table_def.check_columns(filters)
