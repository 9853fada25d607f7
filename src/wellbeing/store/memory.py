"""
In-memory store.

Simulates the Postgres tables for tests and local runs: values are
normalized on the way in, filters use the shared comparison rules, surrogate
ids are generated, and the unique keys from the SQL migration are enforced.
"""

import logging
import threading
import uuid
from typing import Any

from wellbeing.errors import ConstraintViolation
from wellbeing.store.base import Store
from wellbeing.store.normalize import match_key, normalize_value, values_equal
from wellbeing.store.schema import TEXT_ARRAY, Table, get_table

logger = logging.getLogger(__name__)


class InMemoryStore(Store):
    """Dict-backed store guarded by a single lock."""

    def __init__(self):
        super().__init__()
        self._tables: dict[str, list[dict[str, Any]]] = {}
        self._lock = threading.Lock()

    def insert(self, table: str, columns: dict[str, Any]) -> None:
        table_def = get_table(table)
        logger.info("[InMemory] insert into %s with columns: %s", table_def.name, ", ".join(columns))
        row = self._normalize_row(table_def, columns)

        with self._lock:
            rows = self._rows(table_def)
            key = self._row_key(table_def, row)
            if any(self._row_key(table_def, existing) == key for existing in rows):
                raise ConstraintViolation(
                    f"Duplicate key for {table_def.name}: "
                    + ", ".join(f"{column}={row[column]!r}" for column in table_def.key)
                )
            rows.append(row)

    def delete(self, table: str, filters: dict[str, Any]) -> int:
        table_def = get_table(table)
        self._check_delete_filters(table_def, filters)
        logger.info("[InMemory] delete from %s with filters: %s", table_def.name, ", ".join(filters))

        with self._lock:
            rows = self._rows(table_def)
            kept = [row for row in rows if not self._matches(table_def, row, filters)]
            removed = len(rows) - len(kept)
            rows[:] = kept

        logger.info("[InMemory] delete from %s removed %d rows", table_def.name, removed)
        return removed

    def select(self, table: str, filters: dict[str, Any]) -> list:
        table_def = get_table(table)
        table_def.check_columns(filters)
        logger.info("[InMemory] select from %s with filters: %s", table_def.name, ", ".join(filters))

        with self._lock:
            return [
                self._to_row(table_def, row)
                for row in self._rows(table_def)
                if self._matches(table_def, row, filters)
            ]

    def select_all(self, table: str) -> list:
        table_def = get_table(table)
        logger.info("[InMemory] select all from %s", table_def.name)

        with self._lock:
            return [self._to_row(table_def, row) for row in self._rows(table_def)]

    # Internals

    def _rows(self, table_def: Table) -> list[dict[str, Any]]:
        return self._tables.setdefault(table_def.name, [])

    @staticmethod
    def _normalize_row(table_def: Table, columns: dict[str, Any]) -> dict[str, Any]:
        row = {column.lower(): None for column in table_def.column_names}
        for column, value in columns.items():
            name = column.lower()
            row[name] = normalize_value(table_def.kind(name), value)

        if table_def.has_surrogate_id and row["id"] is None:
            row["id"] = uuid.uuid4()
        for column, kind in table_def.columns.items():
            if kind == TEXT_ARRAY and row[column] is None:
                row[column] = []
        return row

    @staticmethod
    def _row_key(table_def: Table, row: dict[str, Any]) -> tuple:
        return tuple(match_key(table_def.kind(column), row[column]) for column in table_def.key)

    @staticmethod
    def _matches(table_def: Table, row: dict[str, Any], filters: dict[str, Any]) -> bool:
        for column, value in filters.items():
            name = column.lower()
            if not values_equal(table_def.kind(name), row[name], value):
                return False
        return True

    @staticmethod
    def _to_row(table_def: Table, row: dict[str, Any]):
        values = {
            column: list(value) if isinstance(value, list) else value
            for column, value in row.items()
        }
        return table_def.row_type(**values)
