import logging
from collections import defaultdict
from typing import List

from wellbeing.definition.model import AllowedValue, CategoryTypes, Definition, OrphanValue
from wellbeing.store import DEFINITIONS, VALUES, Store
from wellbeing.store.normalize import text_key
from wellbeing.store.schema import ValueRow
from wellbeing.validation import require_label

logger = logging.getLogger(__name__)


class DefinitionRepository:
    """
    Repository for the definition catalog.
    Encapsulates access to the entry_definitions and entry_values tables.

    Allowed values are keyed by type name alone, so two categories that
    define a type with the same name share its values.
    """

    def __init__(self, store: Store):
        self.store = store

    # Types

    def create_type(self, category: str, type: str, allow_multiple: bool = False) -> Definition:
        """Create a definition. A duplicate (category, type) raises ConstraintViolation."""
        category = require_label("category", category)
        type = require_label("type", type)
        logger.debug("create_type %s/%s allow_multiple=%s", category, type, allow_multiple)

        self.store.insert(
            DEFINITIONS.name,
            {"category": category, "type": type, "allows_multiple": bool(allow_multiple)},
        )
        return Definition(category=category, type=type, allow_multiple=bool(allow_multiple))

    def delete_type(self, category: str, type: str) -> None:
        """
        Delete a definition and, when no other category still defines a type
        of the same name, the allowed values of that type.
        """
        category = require_label("category", category)
        type = require_label("type", type)

        removed = self.store.delete(DEFINITIONS.name, {"category": category, "type": type})
        logger.debug("delete_type %s/%s removed %d definitions", category, type, removed)

        if self.store.select(DEFINITIONS.name, {"type": type}):
            logger.info("Keeping values of %s: still defined in another category", type)
            return
        dropped = self.store.delete(VALUES.name, {"parent_type": type})
        logger.debug("delete_type %s/%s removed %d values", category, type, dropped)

    # Values

    def add_value(self, type: str, value: str, notable: bool = False) -> AllowedValue:
        """Add an allowed value. A duplicate (type, value) raises ConstraintViolation."""
        type = require_label("type", type)
        value = require_label("value", value)
        logger.debug("add_value %s=%s notable=%s", type, value, notable)

        self.store.insert(
            VALUES.name,
            {"parent_type": type, "value": value, "is_notable": bool(notable)},
        )
        return AllowedValue(value=value, notable=bool(notable))

    def delete_value(self, type: str, value: str) -> None:
        type = require_label("type", type)
        value = require_label("value", value)
        removed = self.store.delete(VALUES.name, {"parent_type": type, "value": value})
        logger.debug("delete_value %s=%s removed %d", type, value, removed)

    def get_values_for_type(self, type: str) -> List[AllowedValue]:
        """List the allowed values of a type, sorted by value. Unknown types give []."""
        type = require_label("type", type)
        rows = self.store.select(VALUES.name, {"parent_type": type})
        return self._to_values(rows)

    # Catalog

    def get_definitions_for_category(self, category: str) -> List[Definition]:
        """
        List the definitions of a category with their allowed values.

        Values for every type are read in one pass and grouped here instead of
        querying once per definition.
        """
        category = require_label("category", category)
        rows = self.store.select(DEFINITIONS.name, {"category": category})
        if not rows:
            return []

        values_by_type = defaultdict(list)
        for row in self.store.select_all(VALUES.name):
            values_by_type[text_key(row.parent_type)].append(row)

        definitions = [
            Definition(
                category=row.category,
                type=row.type,
                allow_multiple=bool(row.allows_multiple),
                values=self._to_values(values_by_type.get(text_key(row.type), [])),
            )
            for row in rows
        ]
        definitions.sort(key=lambda d: text_key(d.type))
        logger.debug("get_definitions_for_category %s returning %d", category, len(definitions))
        return definitions

    def get_all_categories_and_types(self) -> List[CategoryTypes]:
        """Group every defined type under its category, both sorted."""
        grouped: dict[str, CategoryTypes] = {}
        for row in self.store.select_all(DEFINITIONS.name):
            item = grouped.setdefault(text_key(row.category), CategoryTypes(category=row.category))
            if text_key(row.type) not in {text_key(t) for t in item.types}:
                item.types.append(row.type)

        catalog = sorted(grouped.values(), key=lambda c: text_key(c.category))
        for item in catalog:
            item.types.sort(key=text_key)
        return catalog

    # Maintenance

    def find_orphan_values(self) -> List[OrphanValue]:
        """List allowed values whose type is no longer defined in any category."""
        defined = {text_key(row.type) for row in self.store.select_all(DEFINITIONS.name)}
        orphans = [
            OrphanValue(type=row.parent_type, value=row.value, notable=bool(row.is_notable))
            for row in self.store.select_all(VALUES.name)
            if text_key(row.parent_type) not in defined
        ]
        orphans.sort(key=lambda o: (text_key(o.type), text_key(o.value)))
        return orphans

    def delete_orphan_values(self) -> int:
        """Delete every orphaned value. Returns how many were removed."""
        removed = 0
        for orphan in self.find_orphan_values():
            removed += self.store.delete(
                VALUES.name, {"parent_type": orphan.type, "value": orphan.value}
            )
        logger.info("Removed %d orphaned values", removed)
        return removed

    @staticmethod
    def _to_values(rows: List[ValueRow]) -> List[AllowedValue]:
        values = [
            AllowedValue(value=row.value, notable=bool(row.is_notable))
            for row in rows
            if row.value is not None
        ]
        values.sort(key=lambda v: text_key(v.value))
        return values
