"""
Postgres store.

Translates the store primitives to parameterized SQL run through
wellbeing.db. Table and column names come from the schema registry, never
from callers, so they are safe to interpolate; values always go through
%s placeholders.
"""

import logging
from contextlib import contextmanager
from typing import Any

import psycopg

from wellbeing import db
from wellbeing.errors import ConstraintViolation, StoreUnavailable
from wellbeing.store.base import Store
from wellbeing.store.normalize import normalize_value
from wellbeing.store.schema import DATE, ID, TEXT, TEXT_ARRAY, Table, get_table

logger = logging.getLogger(__name__)


@contextmanager
def translate_errors(action: str, table: str):
    """Map psycopg failures onto the store error taxonomy."""
    try:
        yield
    except psycopg.IntegrityError as e:
        raise ConstraintViolation(f"{action} on {table} violated a constraint: {e}") from e
    except psycopg.Error as e:
        raise StoreUnavailable(f"{action} on {table} failed: {e}") from e


def where_clause(table_def: Table, filters: dict[str, Any]) -> tuple[str, list]:
    """
    Build a WHERE clause matching the in-memory comparison rules.

    Text compares through lower() on both sides, dates are cast to date.
    """
    conditions = []
    params = []
    for column, value in filters.items():
        name = column.lower()
        kind = table_def.kind(name)
        if value is None:
            conditions.append(f"{name} IS NULL")
            continue
        if kind == TEXT:
            conditions.append(f"lower({name}) = lower(%s)")
        elif kind == DATE:
            conditions.append(f"{name} = %s::date")
        else:
            conditions.append(f"{name} = %s")
        params.append(normalize_value(kind, value))

    if not conditions:
        return "", params
    return " WHERE " + " AND ".join(conditions), params


def conflict_target(table_def: Table) -> str:
    """The key expression of the table's unique index."""
    parts = [
        f"lower({column})" if table_def.kind(column) == TEXT else column
        for column in table_def.key
    ]
    return ", ".join(parts)


class PostgresStore(Store):
    """Store backed by a Postgres database."""

    def insert(self, table: str, columns: dict[str, Any]) -> None:
        table_def = get_table(table)
        logger.info("insert into %s with columns: %s", table_def.name, ", ".join(columns))
        names, params = self._column_values(table_def, columns)

        query = (
            f"INSERT INTO {table_def.name} ({', '.join(names)}) "
            f"VALUES ({', '.join(['%s'] * len(names))})"
        )
        with translate_errors("insert", table_def.name):
            affected = db.execute(query, tuple(params))
        logger.info("insert into %s affected %d rows", table_def.name, affected)

    def delete(self, table: str, filters: dict[str, Any]) -> int:
        table_def = get_table(table)
        self._check_delete_filters(table_def, filters)
        logger.info("delete from %s with filters: %s", table_def.name, ", ".join(filters))
        where, params = where_clause(table_def, filters)

        with translate_errors("delete", table_def.name):
            affected = db.execute(f"DELETE FROM {table_def.name}{where}", tuple(params))
        logger.info("delete from %s affected %d rows", table_def.name, affected)
        return affected

    def select(self, table: str, filters: dict[str, Any]) -> list:
        table_def = get_table(table)
        logger.info("select from %s with filters: %s", table_def.name, ", ".join(filters))
        where, params = where_clause(table_def, filters)
        return self._fetch(table_def, where, params)

    def select_all(self, table: str) -> list:
        table_def = get_table(table)
        logger.info("select all from %s", table_def.name)
        return self._fetch(table_def, "", [])

    def upsert(self, table: str, columns: dict[str, Any]) -> None:
        """Write one row with INSERT ... ON CONFLICT DO UPDATE."""
        table_def = get_table(table)
        self._key_filters(table_def, columns)
        logger.info("upsert into %s with columns: %s", table_def.name, ", ".join(columns))
        names, params = self._column_values(table_def, columns)

        updates = [f"{name} = EXCLUDED.{name}" for name in names if table_def.kind(name) != ID]
        action = f"DO UPDATE SET {', '.join(updates)}" if updates else "DO NOTHING"
        query = (
            f"INSERT INTO {table_def.name} ({', '.join(names)}) "
            f"VALUES ({', '.join(['%s'] * len(names))}) "
            f"ON CONFLICT ({conflict_target(table_def)}) {action}"
        )
        with translate_errors("upsert", table_def.name):
            affected = db.execute(query, tuple(params))
        logger.info("upsert into %s affected %d rows", table_def.name, affected)

    # Internals

    @staticmethod
    def _column_values(table_def: Table, columns: dict[str, Any]) -> tuple[list[str], list]:
        names = []
        params = []
        for column, value in columns.items():
            name = column.lower()
            names.append(name)
            params.append(normalize_value(table_def.kind(name), value))
        return names, params

    def _fetch(self, table_def: Table, where: str, params: list) -> list:
        query = f"SELECT {', '.join(table_def.column_names)} FROM {table_def.name}{where}"
        with translate_errors("select", table_def.name):
            records = db.fetch_all(query, tuple(params) if params else None)
        logger.info("select from %s returned %d rows", table_def.name, len(records))
        return [self._to_row(table_def, record) for record in records]

    @staticmethod
    def _to_row(table_def: Table, record: dict[str, Any]):
        values = {}
        for column, kind in table_def.columns.items():
            value = record.get(column)
            if kind == TEXT_ARRAY:
                value = list(value or [])
            values[column] = value
        return table_def.row_type(**values)
