"""
Table layout shared by every store.

Each table has an ordered column list, a unique key and a typed row struct.
The row struct's field order is the canonical column order: stores build
rows by name, callers read them by name, and nothing depends on positions.
"""

from dataclasses import dataclass
from datetime import date
from typing import NamedTuple
from uuid import UUID

TEXT = "text"
DATE = "date"
BOOL = "bool"
TEXT_ARRAY = "text[]"
ID = "id"


class EntryRow(NamedTuple):
    date: date
    category: str
    type: str
    values_list: list[str]


class DefinitionRow(NamedTuple):
    id: UUID
    category: str
    type: str
    allows_multiple: bool


class ValueRow(NamedTuple):
    id: UUID
    parent_type: str
    value: str
    is_notable: bool


@dataclass(frozen=True)
class Table:
    name: str
    columns: dict[str, str]
    key: tuple[str, ...]
    row_type: type

    @property
    def column_names(self) -> tuple[str, ...]:
        return tuple(self.columns)

    @property
    def has_surrogate_id(self) -> bool:
        return self.columns.get("id") == ID

    def kind(self, column: str) -> str:
        """Return the kind of a column, rejecting unknown names."""
        try:
            return self.columns[column.lower()]
        except KeyError:
            raise ValueError(f"Unknown column {column!r} for table {self.name}") from None

    def check_columns(self, columns) -> None:
        for column in columns:
            self.kind(column)


ENTRIES = Table(
    name="entry_data",
    columns={"date": DATE, "category": TEXT, "type": TEXT, "values_list": TEXT_ARRAY},
    key=("date", "category", "type"),
    row_type=EntryRow,
)

DEFINITIONS = Table(
    name="entry_definitions",
    columns={"id": ID, "category": TEXT, "type": TEXT, "allows_multiple": BOOL},
    key=("category", "type"),
    row_type=DefinitionRow,
)

VALUES = Table(
    name="entry_values",
    columns={"id": ID, "parent_type": TEXT, "value": TEXT, "is_notable": BOOL},
    key=("parent_type", "value"),
    row_type=ValueRow,
)

TABLES = {table.name: table for table in (ENTRIES, DEFINITIONS, VALUES)}


def get_table(name: str) -> Table:
    """Look up a table by name, case-insensitively."""
    try:
        return TABLES[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown table: {name}") from None
