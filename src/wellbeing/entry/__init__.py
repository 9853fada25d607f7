"""
Entry

This package provides the Entry model and its repository.
"""

from wellbeing.entry.model import Entry
from wellbeing.entry.repository import EntryRepository

__all__ = ["Entry", "EntryRepository"]
