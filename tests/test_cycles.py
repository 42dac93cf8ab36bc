"""Tests for cycle generation."""

from datetime import date, timedelta

import pytest

from cycletrack.core.exceptions import InvalidArgumentError
from cycletrack.engine.cycles import SYSTEM_START_DATE, build_cycle, initial_cycles
from cycletrack.engine.locator import cycle_number_for_date


class TestBuildCycle:
    """Tests for build_cycle function."""

    def test_first_cycle(self) -> None:
        """Test the boundaries of cycle 1."""
        cycle = build_cycle(1)
        assert cycle.cycle_number == 1
        assert cycle.work_start == date(2025, 6, 26)
        assert cycle.work_end == date(2025, 7, 6)
        assert cycle.rest_start == date(2025, 7, 7)
        assert cycle.rest_end == date(2025, 7, 9)
        assert cycle.next_cycle_start == date(2025, 7, 10)

    def test_second_cycle(self) -> None:
        cycle = build_cycle(2)
        assert cycle.work_start == date(2025, 7, 10)
        assert cycle.work_end == date(2025, 7, 20)
        assert cycle.rest_start == date(2025, 7, 21)
        assert cycle.rest_end == date(2025, 7, 23)

    def test_epoch_is_thursday(self) -> None:
        assert SYSTEM_START_DATE.weekday() == 3

    def test_label(self) -> None:
        assert build_cycle(1).label == "Cycle 1: Thu 26 Jun - Sun 06 Jul"

    def test_deterministic(self) -> None:
        """Test that building the same cycle twice gives equal values."""
        assert build_cycle(7) == build_cycle(7)

    def test_immutable(self) -> None:
        cycle = build_cycle(1)
        with pytest.raises(Exception):
            cycle.cycle_number = 2  # type: ignore[misc]

    @pytest.mark.parametrize("value", [0, -1, -14])
    def test_rejects_non_positive(self, value: int) -> None:
        """Test that cycles before the epoch cannot be built."""
        with pytest.raises(InvalidArgumentError):
            build_cycle(value)

    def test_rejects_non_integer(self) -> None:
        with pytest.raises(InvalidArgumentError):
            build_cycle(1.5)  # type: ignore[arg-type]
        with pytest.raises(InvalidArgumentError):
            build_cycle(True)

    def test_rejects_cycles_past_date_range(self) -> None:
        """Test that a cycle ending after date.max is an argument error."""
        with pytest.raises(InvalidArgumentError):
            build_cycle(cycle_number_for_date(date.max))
        with pytest.raises(InvalidArgumentError):
            build_cycle(10**9)


class TestCycleProperties:
    """Structural properties that hold for every cycle."""

    @pytest.mark.parametrize("n", range(1, 60))
    def test_consecutive_cycles_touch(self, n: int) -> None:
        """Test that there are no gaps or overlaps between cycles."""
        assert build_cycle(n).next_cycle_start == build_cycle(n + 1).work_start

    @pytest.mark.parametrize("n", [1, 2, 13, 27, 100, 500])
    def test_work_and_rest_partition_the_cycle(self, n: int) -> None:
        """Test 11 work days and 3 rest days covering 14 consecutive days."""
        cycle = build_cycle(n)
        assert len(cycle.work_days) == 11
        assert len(cycle.rest_days) == 3
        assert not set(cycle.work_days) & set(cycle.rest_days)

        span = [cycle.work_start + timedelta(days=i) for i in range(14)]
        assert list(cycle.days) == span
        assert span[-1] == cycle.rest_end

    @pytest.mark.parametrize("n", [1, 2, 3, 26, 27, 52, 200])
    def test_work_starts_on_thursday(self, n: int) -> None:
        cycle = build_cycle(n)
        assert cycle.work_start.weekday() == 3
        assert cycle.work_end.weekday() == 6
        assert cycle.rest_start.weekday() == 0
        assert cycle.rest_end.weekday() == 2

    @pytest.mark.parametrize("n", range(1, 60))
    def test_round_trip(self, n: int) -> None:
        """Test that each cycle's first day maps back to its number."""
        assert cycle_number_for_date(build_cycle(n).work_start) == n

    def test_crosses_year_boundary(self) -> None:
        """Test a cycle spanning New Year."""
        cycle = build_cycle(14)
        assert cycle.work_start == date(2025, 12, 25)
        assert cycle.work_end == date(2026, 1, 4)
        assert cycle.next_cycle_start == date(2026, 1, 8)


class TestInitialCycles:
    """Tests for initial_cycles function."""

    def test_default_count(self) -> None:
        cycles = initial_cycles()
        assert [c.cycle_number for c in cycles] == list(range(1, 21))

    def test_rejects_zero(self) -> None:
        with pytest.raises(InvalidArgumentError):
            initial_cycles(0)
