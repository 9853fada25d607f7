from typing import Iterable

from wellbeing.definition.model import Definition
from wellbeing.entry.model import Entry
from wellbeing.store.normalize import text_key


class NotableLookup:
    """Answers whether a recorded value is flagged notable in the catalog."""

    def __init__(self, definitions: Iterable[Definition] = ()):
        self._notable: dict[tuple[str, str], set[str]] = {}
        for definition in definitions:
            self.add(definition)

    def add(self, definition: Definition) -> None:
        notable = {text_key(v.value.strip()) for v in definition.values if v.notable}
        if notable:
            key = (text_key(definition.category.strip()), text_key(definition.type.strip()))
            self._notable.setdefault(key, set()).update(notable)

    def is_notable(self, category: str, type: str, value: str) -> bool:
        values = self._notable.get((text_key(category.strip()), text_key(type.strip())))
        return bool(values) and text_key(value.strip()) in values

    def split(self, entry: Entry) -> tuple[list[str], list[str]]:
        """Split an entry's values into (notable, regular), keeping order."""
        notable, regular = [], []
        for value in entry.values:
            if self.is_notable(entry.category, entry.type, value):
                notable.append(value)
            else:
                regular.append(value)
        return notable, regular

    def has_notable(self, entry: Entry) -> bool:
        return any(self.is_notable(entry.category, entry.type, v) for v in entry.values)
