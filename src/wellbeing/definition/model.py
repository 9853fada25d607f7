from dataclasses import dataclass, field


@dataclass
class AllowedValue:
    value: str
    notable: bool = False

    def to_dict(self) -> dict:
        return {"value": self.value, "notable": self.notable}


@dataclass
class Definition:
    """Declares a legal (category, type) and the values it may carry."""

    category: str
    type: str
    allow_multiple: bool = False
    values: list[AllowedValue] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "type": self.type,
            "allowMultiple": self.allow_multiple,
            "values": [value.to_dict() for value in self.values],
        }


@dataclass
class CategoryTypes:
    """Catalog item: a category and the types defined under it."""

    category: str
    types: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"category": self.category, "types": list(self.types)}


@dataclass
class OrphanValue:
    """An allowed value whose parent type has no definition left."""

    type: str
    value: str
    notable: bool

    def to_dict(self) -> dict:
        return {"type": self.type, "value": self.value, "notable": self.notable}
