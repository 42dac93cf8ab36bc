"""Entry repositories.

The engine only reads entries; repositories own creating, updating and
deleting them and tell subscribers when the collection changes.
Subscribers get no delta: they are expected to call list_entries() again.
"""

import datetime as dt
import logging
from collections.abc import Callable
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import Annotated, Any, Protocol

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator

from cycletrack.core.exceptions import DataAccessError, EntryNotFoundError
from cycletrack.core.models import EntryType, FinancialEntry
from cycletrack.engine.calendar import from_canonical

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[], None]
Unsubscribe = Callable[[], None]

_entries_adapter = TypeAdapter(list[FinancialEntry])


def dump_entries(entries: list[FinancialEntry]) -> bytes:
    """Serialise entries as an indented JSON array."""
    return _entries_adapter.dump_json(entries, indent=2)


class EntryCreate(BaseModel):
    """Fields accepted when creating an entry."""

    type: EntryType
    category: str = Field(min_length=1)
    amount: Annotated[Decimal, Field(ge=0)]
    date: date
    description: str | None = None

    @field_validator("date", mode="before")
    @classmethod
    def parse_canonical_date(cls, value: object) -> object:
        if isinstance(value, (str, date)):
            return from_canonical(value)
        return value


class EntryUpdate(BaseModel):
    """Partial update; only fields that are set are applied."""

    type: EntryType | None = None
    category: str | None = Field(default=None, min_length=1)
    amount: Annotated[Decimal, Field(ge=0)] | None = None
    date: dt.date | None = None
    description: str | None = None

    @field_validator("date", mode="before")
    @classmethod
    def parse_canonical_date(cls, value: object) -> object:
        if isinstance(value, (str, date)):
            return from_canonical(value)
        return value


class EntryRepository(Protocol):
    """What the tracker needs from an entry store."""

    def list_entries(self) -> list[FinancialEntry]: ...

    def create_entry(self, data: EntryCreate | dict[str, Any]) -> FinancialEntry: ...

    def update_entry(self, entry_id: str, data: EntryUpdate | dict[str, Any]) -> FinancialEntry: ...

    def delete_entry(self, entry_id: str) -> bool: ...

    def subscribe_to_changes(self, on_change: ChangeCallback) -> Unsubscribe: ...


class InMemoryEntryRepository:
    """List-backed repository.

    Notifies subscribers after every successful mutation.
    """

    def __init__(self, entries: list[FinancialEntry] | None = None):
        self._entries: list[FinancialEntry] = list(entries or [])
        self._subscribers: list[ChangeCallback] = []

    def list_entries(self) -> list[FinancialEntry]:
        return list(self._entries)

    def get_entry(self, entry_id: str) -> FinancialEntry:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        raise EntryNotFoundError(entry_id)

    def create_entry(self, data: EntryCreate | dict[str, Any]) -> FinancialEntry:
        if isinstance(data, dict):
            data = EntryCreate.model_validate(data)
        entry = FinancialEntry(**data.model_dump())
        self._commit([*self._entries, entry])
        logger.info("Created %s entry %s (%s)", entry.type.value, entry.id, entry.amount)
        return entry

    def update_entry(self, entry_id: str, data: EntryUpdate | dict[str, Any]) -> FinancialEntry:
        if isinstance(data, dict):
            data = EntryUpdate.model_validate(data)
        current = self.get_entry(entry_id)

        changes = data.model_dump(exclude_unset=True)
        updated = FinancialEntry.model_validate(
            {**current.model_dump(), **changes, "updated_at": datetime.now()}
        )
        self._commit([updated if e is current else e for e in self._entries])
        logger.info("Updated entry %s: %s", entry_id, sorted(changes))
        return updated

    def delete_entry(self, entry_id: str) -> bool:
        try:
            entry = self.get_entry(entry_id)
        except EntryNotFoundError:
            return False
        self._commit([e for e in self._entries if e is not entry])
        logger.info("Deleted entry %s", entry_id)
        return True

    def subscribe_to_changes(self, on_change: ChangeCallback) -> Unsubscribe:
        """Register a callback invoked after each mutation.

        Returns:
            A function that removes the callback again.
        """
        self._subscribers.append(on_change)

        def unsubscribe() -> None:
            if on_change in self._subscribers:
                self._subscribers.remove(on_change)

        return unsubscribe

    def _persist(self, entries: list[FinancialEntry]) -> None:
        """Hook for subclasses that store entries somewhere."""

    def _commit(self, entries: list[FinancialEntry]) -> None:
        """Store the new collection, then replace the in-memory one and notify.

        If storing fails the in-memory collection is left untouched.
        """
        self._persist(entries)
        self._entries = entries
        for callback in list(self._subscribers):
            callback()


class JsonFileEntryRepository(InMemoryEntryRepository):
    """Repository persisted as a JSON array in a single file.

    The file is read once on construction (or on reload()) and rewritten
    after each mutation. A missing file is an empty collection.
    """

    def __init__(self, path: Path):
        super().__init__()
        self.path = path
        self.reload()

    def reload(self) -> None:
        """Re-read the file, discarding the in-memory state."""
        if not self.path.exists():
            self._entries = []
            return
        try:
            raw = self.path.read_bytes()
            self._entries = _entries_adapter.validate_json(raw) if raw.strip() else []
        except OSError as e:
            raise DataAccessError(f"Cannot read entries from {self.path}: {e}") from e
        except ValidationError as e:
            raise DataAccessError(f"Corrupt entry store {self.path}: {e}") from e
        logger.debug("Loaded %d entries from %s", len(self._entries), self.path)

    def _persist(self, entries: list[FinancialEntry]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_bytes(dump_entries(entries))
        except OSError as e:
            raise DataAccessError(f"Cannot write entries to {self.path}: {e}") from e
