"""
Definition

This package provides the definition catalog: which (category, type) pairs
exist, whether they allow multiple values, and their allowed values.
"""

from wellbeing.definition.model import AllowedValue, CategoryTypes, Definition, OrphanValue
from wellbeing.definition.repository import DefinitionRepository

__all__ = [
    "AllowedValue",
    "CategoryTypes",
    "Definition",
    "DefinitionRepository",
    "OrphanValue",
]
