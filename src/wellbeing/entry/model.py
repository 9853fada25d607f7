from dataclasses import dataclass, field
from datetime import date

from wellbeing.errors import ValidationError
from wellbeing.store.normalize import normalize_date
from wellbeing.validation import require_values
from wellbeing.wire import pick, require_text


@dataclass
class Entry:
    """One recorded fact: the values of a (category, type) on a day."""

    date: date
    category: str
    type: str
    values: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "category": self.category,
            "type": self.type,
            "values": list(self.values),
        }

    @classmethod
    def from_dict(cls, payload: dict) -> "Entry":
        raw_values = pick(payload, "values", None)
        values = [] if raw_values is None else require_values(raw_values)

        return cls(
            date=parse_date(pick(payload, "date")),
            category=require_text(payload, "category"),
            type=require_text(payload, "type"),
            values=values,
        )


def parse_date(value) -> date:
    """Parse a wire date, reporting bad input as a validation error."""
    try:
        return normalize_date(value)
    except ValueError as e:
        raise ValidationError(str(e)) from None


def parse_optional_date(value) -> date | None:
    if value is None or value == "":
        return None
    return parse_date(value)
