"""Tests for entry repositories."""

from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest
from pydantic import ValidationError

from cycletrack.core.exceptions import DataAccessError, EntryNotFoundError
from cycletrack.core.models import EntryType
from cycletrack.storage.repository import (
    EntryCreate,
    EntryUpdate,
    InMemoryEntryRepository,
    JsonFileEntryRepository,
)

SALARY = {"type": "income", "category": "salary", "amount": "1000", "date": "2025-06-27"}


def failing_write(self: Path, data: bytes) -> int:
    raise OSError("disk full")


class TestInMemoryEntryRepository:
    """Tests for InMemoryEntryRepository."""

    def test_create_from_dict(self) -> None:
        repo = InMemoryEntryRepository()
        entry = repo.create_entry(SALARY)
        assert entry.type == EntryType.INCOME
        assert entry.amount == Decimal(1000)
        assert entry.date == date(2025, 6, 27)
        assert repo.list_entries() == [entry]

    def test_create_from_model(self) -> None:
        repo = InMemoryEntryRepository()
        data = EntryCreate(type=EntryType.EXPENSE, category="food", amount=Decimal("12.5"), date="2025-07-01")
        entry = repo.create_entry(data)
        assert entry.category == "food"
        assert entry.id

    def test_create_rejects_negative_amount(self) -> None:
        repo = InMemoryEntryRepository()
        with pytest.raises(ValidationError):
            repo.create_entry({**SALARY, "amount": "-1"})

    def test_create_rejects_malformed_date(self) -> None:
        repo = InMemoryEntryRepository()
        with pytest.raises(ValidationError):
            repo.create_entry({**SALARY, "date": "27/06/2025"})

    def test_list_returns_copy(self) -> None:
        repo = InMemoryEntryRepository()
        repo.create_entry(SALARY)
        repo.list_entries().clear()
        assert len(repo.list_entries()) == 1

    def test_update(self) -> None:
        repo = InMemoryEntryRepository()
        entry = repo.create_entry(SALARY)
        updated = repo.update_entry(entry.id, {"amount": "1500", "date": "2025-07-08"})

        assert updated.id == entry.id
        assert updated.amount == Decimal(1500)
        assert updated.date == date(2025, 7, 8)
        assert updated.category == "salary"
        assert updated.updated_at >= entry.updated_at
        assert repo.list_entries() == [updated]

    def test_update_with_model(self) -> None:
        repo = InMemoryEntryRepository()
        entry = repo.create_entry(SALARY)
        updated = repo.update_entry(entry.id, EntryUpdate(description="June pay"))
        assert updated.description == "June pay"
        assert updated.amount == Decimal(1000)

    def test_update_unknown(self) -> None:
        """Test that updating a missing entry is a data access error."""
        repo = InMemoryEntryRepository()
        with pytest.raises(EntryNotFoundError) as exc_info:
            repo.update_entry("missing", {"amount": "1"})
        assert isinstance(exc_info.value, DataAccessError)
        assert exc_info.value.entry_id == "missing"

    def test_delete(self) -> None:
        repo = InMemoryEntryRepository()
        entry = repo.create_entry(SALARY)
        assert repo.delete_entry(entry.id) is True
        assert repo.list_entries() == []

    def test_delete_unknown(self) -> None:
        assert InMemoryEntryRepository().delete_entry("missing") is False

    def test_subscribers_notified(self) -> None:
        """Test one notification per mutation."""
        repo = InMemoryEntryRepository()
        calls: list[int] = []
        repo.subscribe_to_changes(lambda: calls.append(len(repo.list_entries())))

        entry = repo.create_entry(SALARY)
        repo.update_entry(entry.id, {"amount": "10"})
        repo.delete_entry(entry.id)
        repo.delete_entry(entry.id)

        assert calls == [1, 1, 0]

    def test_unsubscribe(self) -> None:
        repo = InMemoryEntryRepository()
        calls: list[str] = []
        unsubscribe = repo.subscribe_to_changes(lambda: calls.append("changed"))

        repo.create_entry(SALARY)
        unsubscribe()
        unsubscribe()
        repo.create_entry(SALARY)

        assert calls == ["changed"]


class TestJsonFileEntryRepository:
    """Tests for JsonFileEntryRepository."""

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        repo = JsonFileEntryRepository(tmp_path / "entries.json")
        assert repo.list_entries() == []

    def test_persists_across_instances(self, tmp_path: Path) -> None:
        path = tmp_path / "data" / "entries.json"
        entry = JsonFileEntryRepository(path).create_entry(SALARY)

        reloaded = JsonFileEntryRepository(path).list_entries()
        assert [e.id for e in reloaded] == [entry.id]
        assert reloaded[0].amount == Decimal(1000)
        assert reloaded[0].date == date(2025, 6, 27)

    def test_delete_persisted(self, tmp_path: Path) -> None:
        path = tmp_path / "entries.json"
        repo = JsonFileEntryRepository(path)
        entry = repo.create_entry(SALARY)
        repo.delete_entry(entry.id)
        assert JsonFileEntryRepository(path).list_entries() == []

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "entries.json"
        path.write_text("")
        assert JsonFileEntryRepository(path).list_entries() == []

    def test_corrupt_file(self, tmp_path: Path) -> None:
        """Test that an unreadable store surfaces as DataAccessError."""
        path = tmp_path / "entries.json"
        path.write_text("{not json")
        with pytest.raises(DataAccessError):
            JsonFileEntryRepository(path)

    def test_invalid_entry_in_file(self, tmp_path: Path) -> None:
        path = tmp_path / "entries.json"
        path.write_text('[{"type": "gift", "category": "x", "amount": "1", "date": "2025-06-27"}]')
        with pytest.raises(DataAccessError):
            JsonFileEntryRepository(path)

    def test_reload_picks_up_external_changes(self, tmp_path: Path) -> None:
        path = tmp_path / "entries.json"
        repo = JsonFileEntryRepository(path)
        JsonFileEntryRepository(path).create_entry(SALARY)

        assert repo.list_entries() == []
        repo.reload()
        assert len(repo.list_entries()) == 1

    def test_failed_write_leaves_memory_unchanged(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that a mutation the store could not save is not kept in memory."""
        path = tmp_path / "entries.json"
        repo = JsonFileEntryRepository(path)
        entry = repo.create_entry(SALARY)
        calls: list[str] = []
        repo.subscribe_to_changes(lambda: calls.append("changed"))

        monkeypatch.setattr(Path, "write_bytes", failing_write)

        with pytest.raises(DataAccessError):
            repo.create_entry({**SALARY, "amount": "5"})
        with pytest.raises(DataAccessError):
            repo.update_entry(entry.id, {"amount": "1"})
        with pytest.raises(DataAccessError):
            repo.delete_entry(entry.id)

        assert repo.list_entries() == [entry]
        assert calls == []

    def test_failed_write_is_not_saved_later(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "entries.json"
        repo = JsonFileEntryRepository(path)

        with monkeypatch.context() as m:
            m.setattr(Path, "write_bytes", failing_write)
            with pytest.raises(DataAccessError):
                repo.create_entry({**SALARY, "category": "lost"})

        repo.create_entry(SALARY)
        assert [e.category for e in JsonFileEntryRepository(path).list_entries()] == ["salary"]
