"""Entry storage collaborators."""

from cycletrack.storage.repository import (
    EntryCreate,
    EntryRepository,
    EntryUpdate,
    InMemoryEntryRepository,
    JsonFileEntryRepository,
)

__all__ = [
    "EntryCreate",
    "EntryRepository",
    "EntryUpdate",
    "InMemoryEntryRepository",
    "JsonFileEntryRepository",
]
