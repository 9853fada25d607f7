import logging
from datetime import date
from typing import Iterable, List, Optional

from wellbeing.entry.model import Entry, parse_date
from wellbeing.errors import DataIntegrityError
from wellbeing.store import ENTRIES, Store
from wellbeing.store.normalize import normalize_date, text_key
from wellbeing.store.schema import EntryRow
from wellbeing.validation import require_label, require_values

logger = logging.getLogger(__name__)


class EntryRepository:
    """
    Repository for well-being entries.
    Maps Entry objects to and from rows of the entry_data table.
    """

    def __init__(self, store: Store):
        self.store = store

    def add_or_replace(self, entry: Entry) -> Entry:
        """Store an entry, overwriting any entry with the same key."""
        entry = Entry(
            date=parse_date(entry.date),
            category=require_label("category", entry.category),
            type=require_label("type", entry.type),
            values=require_values(entry.values),
        )
        logger.debug("add_or_replace %s/%s on %s", entry.category, entry.type, entry.date)

        self.store.upsert(
            ENTRIES.name,
            {
                "date": entry.date,
                "category": entry.category,
                "type": entry.type,
                "values_list": list(entry.values),
            },
        )
        return entry

    def remove_by_key(self, entry_date: date, category: str, type: str) -> None:
        """Delete the entry for a key. Missing keys are ignored."""
        removed = self.store.delete(ENTRIES.name, self._key(entry_date, category, type))
        logger.debug("remove_by_key %s/%s on %s removed %d", category, type, entry_date, removed)

    def get_by_key(self, entry_date: date, category: str, type: str) -> Optional[Entry]:
        """Get the entry for a key, or None when there is none."""
        rows = self.store.select(ENTRIES.name, self._key(entry_date, category, type))
        if not rows:
            logger.warning("No entry for %s/%s on %s", category, type, entry_date)
            return None
        if len(rows) > 1:
            raise DataIntegrityError(
                f"{len(rows)} entries share the key {entry_date}/{category}/{type}"
            )
        return self._to_entry(rows[0])

    def list_all(
        self,
        start_date: date = None,
        end_date: date = None,
        category_types: Iterable[tuple[str, str]] = None,
    ) -> List[Entry]:
        """
        List entries inside an inclusive date range, optionally restricted to
        a set of (category, type) pairs.

        Ranges and pair sets cannot be expressed as equality filters, so the
        whole table is read and filtered here.
        """
        start = parse_date(start_date) if start_date else None
        end = parse_date(end_date) if end_date else None
        pairs = {
            (text_key(category.strip()), text_key(type.strip()))
            for category, type in category_types or ()
        }

        entries = []
        for row in self.store.select_all(ENTRIES.name):
            entry = self._to_entry(row)
            if start and entry.date < start:
                continue
            if end and entry.date > end:
                continue
            if pairs and (text_key(entry.category), text_key(entry.type)) not in pairs:
                continue
            entries.append(entry)

        entries.sort(key=lambda e: (e.date, text_key(e.category), text_key(e.type)))
        logger.debug("list_all returning %d entries", len(entries))
        return entries

    @staticmethod
    def _key(entry_date: date, category: str, type: str) -> dict:
        return {
            "date": parse_date(entry_date),
            "category": require_label("category", category),
            "type": require_label("type", type),
        }

    @staticmethod
    def _to_entry(row: EntryRow) -> Entry:
        return Entry(
            date=normalize_date(row.date),
            category=row.category or "",
            type=row.type or "",
            values=list(row.values_list or []),
        )
