"""Shared fixtures."""

from collections.abc import Callable
from decimal import Decimal

import pytest

from cycletrack.core.models import EntryType, FinancialEntry, WorkCycle
from cycletrack.engine.cycles import build_cycle


@pytest.fixture
def make_entry() -> Callable[..., FinancialEntry]:
    """Factory for entries: make_entry("income", "1000", "2025-06-27")."""

    def factory(
        entry_type: str,
        amount: str,
        on_date: str,
        category: str = "general",
    ) -> FinancialEntry:
        return FinancialEntry(
            type=EntryType(entry_type),
            amount=Decimal(amount),
            date=on_date,
            category=category,
        )

    return factory


@pytest.fixture
def cycle_one() -> WorkCycle:
    return build_cycle(1)
