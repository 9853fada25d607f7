from datetime import date
from typing import Iterable

import pandas as pd

from wellbeing.definition import DefinitionRepository
from wellbeing.entry import Entry, EntryRepository
from wellbeing.insights.notable import NotableLookup
from wellbeing.store.normalize import text_key


class InsightService:
    """
    Aggregates entries for dashboards: how often each type was recorded,
    how often it carried a notable value, and which values came up.
    """

    def __init__(self, entries: EntryRepository, definitions: DefinitionRepository):
        self.entries = entries
        self.definitions = definitions

    def notable_lookup(self, entries: list[Entry]) -> NotableLookup:
        """Build a lookup from the definitions of every category in the entries."""
        lookup = NotableLookup()
        categories = {text_key(e.category): e.category for e in entries}
        for category in categories.values():
            for definition in self.definitions.get_definitions_for_category(category):
                lookup.add(definition)
        return lookup

    def summarize(
        self,
        start_date: date = None,
        end_date: date = None,
        category_types: Iterable[tuple[str, str]] = None,
    ) -> dict:
        entries = self.entries.list_all(start_date, end_date, category_types)
        summary = {
            "startDate": start_date.isoformat() if start_date else None,
            "endDate": end_date.isoformat() if end_date else None,
            "totalEntries": len(entries),
            "types": [],
            "notableDates": [],
        }
        if not entries:
            return summary

        lookup = self.notable_lookup(entries)
        df = pd.DataFrame(
            [
                {
                    "date": e.date,
                    "category": e.category,
                    "type": e.type,
                    "category_key": text_key(e.category),
                    "type_key": text_key(e.type),
                    "values": e.values,
                    "notable": lookup.has_notable(e),
                }
                for e in entries
            ]
        )

        keys = ["category_key", "type_key"]
        per_type = (
            df.groupby(keys, sort=True)
            .agg(
                category=("category", "first"),
                type=("type", "first"),
                entries=("date", "size"),
                notable_entries=("notable", "sum"),
            )
            .reset_index()
        )

        exploded = df.explode("values").dropna(subset=["values"])
        value_counts = {}
        if not exploded.empty:
            counts = exploded.groupby(keys + ["values"]).size()
            for (category_key, type_key, value), count in counts.items():
                value_counts.setdefault((category_key, type_key), {})[value] = int(count)

        for row in per_type.itertuples(index=False):
            summary["types"].append(
                {
                    "category": row.category,
                    "type": row.type,
                    "entries": int(row.entries),
                    "notableEntries": int(row.notable_entries),
                    "values": value_counts.get((row.category_key, row.type_key), {}),
                }
            )

        notable_dates = sorted(df.loc[df["notable"], "date"].unique())
        summary["notableDates"] = [d.isoformat() for d in notable_dates]
        return summary
