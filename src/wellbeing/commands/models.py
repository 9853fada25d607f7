"""
Command payloads accepted by the CommandHandler.

Each command has a from_json() that reads the wire payload posted to the
matching /command endpoint. Keys are matched case-insensitively.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from wellbeing.entry.model import Entry, parse_date, parse_optional_date
from wellbeing.errors import ValidationError
from wellbeing.wire import optional_bool, pick, require_text


@dataclass
class SetWellBeingDataCmd:
    data: Entry

    @classmethod
    def from_json(cls, payload: dict) -> "SetWellBeingDataCmd":
        # Accept both {"data": {...}} and a bare entry object
        inner = pick(payload, "data", None)
        return cls(data=Entry.from_dict(inner if inner is not None else payload))


@dataclass
class EntryKeyCmd:
    date: date
    category: str
    type: str

    @classmethod
    def from_json(cls, payload: dict):
        return cls(
            date=parse_date(pick(payload, "date")),
            category=require_text(payload, "category"),
            type=require_text(payload, "type"),
        )


class DeleteWellBeingDataCmd(EntryKeyCmd):
    pass


class GetWellBeingDataCmd(EntryKeyCmd):
    pass


@dataclass
class GetAllWellBeingDataCmd:
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    category_and_types: list[tuple[str, str]] = field(default_factory=list)

    @classmethod
    def from_json(cls, payload: dict) -> "GetAllWellBeingDataCmd":
        raw_pairs = pick(payload, "categoryAndTypes", None) or []
        if not isinstance(raw_pairs, list):
            raise ValidationError("categoryAndTypes must be a list")
        return cls(
            start_date=parse_optional_date(pick(payload, "startDate", None)),
            end_date=parse_optional_date(pick(payload, "endDate", None)),
            category_and_types=[
                (require_text(item, "category"), require_text(item, "type")) for item in raw_pairs
            ],
        )


@dataclass
class CreateWellBeingTypeCmd:
    category: str
    type: str
    allow_multiple: bool = False

    @classmethod
    def from_json(cls, payload: dict) -> "CreateWellBeingTypeCmd":
        # The UI sends allowMultipleSelection, the wire model says allowMultiple
        if pick(payload, "allowMultipleSelection", None) is not None:
            flag = "allowMultipleSelection"
        else:
            flag = "allowMultiple"
        return cls(
            category=require_text(payload, "category"),
            type=require_text(payload, "type"),
            allow_multiple=optional_bool(payload, flag),
        )


@dataclass
class DeleteWellBeingTypeCmd:
    category: str
    type: str

    @classmethod
    def from_json(cls, payload: dict) -> "DeleteWellBeingTypeCmd":
        # The UI nests the key as {"categoryAndType": {...}}
        inner = pick(payload, "categoryAndType", None)
        source = inner if inner is not None else payload
        return cls(category=require_text(source, "category"), type=require_text(source, "type"))


@dataclass
class AddWellBeingValueCmd:
    type: str
    value: str
    notable: bool = False

    @classmethod
    def from_json(cls, payload: dict) -> "AddWellBeingValueCmd":
        return cls(
            type=require_text(payload, "type"),
            value=require_text(payload, "value"),
            notable=optional_bool(payload, "notable"),
        )


@dataclass
class DeleteWellBeingValueCmd:
    type: str
    value: str

    @classmethod
    def from_json(cls, payload: dict) -> "DeleteWellBeingValueCmd":
        return cls(type=require_text(payload, "type"), value=require_text(payload, "value"))


@dataclass
class GetWellBeingDefinitionsCmd:
    category: str

    @classmethod
    def from_json(cls, payload: dict) -> "GetWellBeingDefinitionsCmd":
        return cls(category=require_text(payload, "category"))


@dataclass
class GetWellBeingValuesCmd:
    type: str

    @classmethod
    def from_json(cls, payload: dict) -> "GetWellBeingValuesCmd":
        return cls(type=require_text(payload, "type"))
