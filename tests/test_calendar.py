"""Tests for calendar arithmetic."""

from datetime import date, datetime

import pytest

from cycletrack.core.exceptions import InvalidArgumentError
from cycletrack.engine.calendar import (
    add_days,
    date_range,
    days_between,
    format_for_display,
    format_short,
    from_canonical,
    same_day,
    to_canonical,
    today,
)


class TestToCanonical:
    """Tests for to_canonical function."""

    def test_canonical_string_unchanged(self) -> None:
        """Test that a canonical string is returned as is."""
        assert to_canonical("2025-06-26") == "2025-06-26"

    def test_date(self) -> None:
        """Test formatting with zero padding."""
        assert to_canonical(date(2025, 1, 5)) == "2025-01-05"

    def test_datetime_uses_local_fields(self) -> None:
        """Test that a late-evening datetime stays on its own day."""
        assert to_canonical(datetime(2025, 6, 26, 23, 59)) == "2025-06-26"

    @pytest.mark.parametrize(
        "value",
        [
            "2025/06/26",
            "26-06-2025",
            "2025-6-26",
            "",
            "2025-06-27\n",
            " 2025-06-27",
            "\uff12\uff10\uff12\uff15-06-27",
        ],
    )
    def test_rejects_non_canonical_strings(self, value: str) -> None:
        """Test that other string formats are not guessed at."""
        with pytest.raises(InvalidArgumentError):
            to_canonical(value)


class TestFromCanonical:
    """Tests for from_canonical function."""

    def test_parse(self) -> None:
        """Test parsing into explicit components."""
        assert from_canonical("2025-06-26") == date(2025, 6, 26)

    def test_date_passthrough(self) -> None:
        """Test that dates pass through and datetimes are truncated."""
        assert from_canonical(date(2025, 7, 1)) == date(2025, 7, 1)
        assert from_canonical(datetime(2025, 7, 1, 0, 30)) == date(2025, 7, 1)

    def test_impossible_day(self) -> None:
        """Test that a well-formed but impossible day is rejected."""
        with pytest.raises(InvalidArgumentError):
            from_canonical("2025-02-30")

    def test_malformed(self) -> None:
        """Test that malformed input is rejected."""
        with pytest.raises(InvalidArgumentError):
            from_canonical("June 26, 2025")


class TestSameDay:
    """Tests for same_day function."""

    def test_string_and_date(self) -> None:
        assert same_day("2025-06-26", date(2025, 6, 26))

    def test_ignores_time_of_day(self) -> None:
        """Test that different times on the same day compare equal."""
        assert same_day(datetime(2025, 6, 26, 0, 0), datetime(2025, 6, 26, 23, 59))

    def test_different_days(self) -> None:
        assert not same_day("2025-06-26", "2025-06-27")


class TestArithmetic:
    """Tests for day arithmetic helpers."""

    def test_add_days_across_month(self) -> None:
        assert add_days(date(2025, 6, 30), 1) == date(2025, 7, 1)

    def test_add_days_across_year(self) -> None:
        assert add_days(date(2025, 12, 25), 14) == date(2026, 1, 8)

    def test_days_between(self) -> None:
        assert days_between(date(2025, 6, 26), date(2025, 7, 10)) == 14
        assert days_between(date(2025, 7, 10), date(2025, 6, 26)) == -14

    def test_date_range(self) -> None:
        days = date_range(date(2025, 2, 27), 3)
        assert days == (date(2025, 2, 27), date(2025, 2, 28), date(2025, 3, 1))


class TestToday:
    """Tests for today function."""

    def test_injected_clock(self) -> None:
        """Test that an injected clock is used and truncated to a day."""
        assert today(lambda: datetime(2025, 7, 1, 18, 0)) == date(2025, 7, 1)

    def test_system_clock(self) -> None:
        assert today() == date.today()


class TestDisplay:
    """Tests for display helpers."""

    def test_format_for_display(self) -> None:
        assert format_for_display("2025-06-26") == "Thursday 26 June"

    def test_format_short(self) -> None:
        assert format_short(date(2025, 7, 6)) == "Sun 06 Jul"
