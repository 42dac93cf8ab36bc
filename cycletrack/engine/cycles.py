"""Work cycle generation.

Cycles are counted from SYSTEM_START_DATE, a Thursday. Each cycle is
11 work days (Thursday to the second Sunday after) followed by 3 rest
days (Monday to Wednesday); the next cycle starts on the Thursday after.
"""

from datetime import date
from functools import lru_cache

from cycletrack.core.exceptions import InvalidArgumentError
from cycletrack.core.models import WorkCycle
from cycletrack.engine.calendar import add_days, date_range, format_short

SYSTEM_START_DATE = date(2025, 6, 26)

WORK_DAYS = 11
REST_DAYS = 3
CYCLE_LENGTH = WORK_DAYS + REST_DAYS


def _validate_cycle_number(cycle_number: int) -> None:
    if isinstance(cycle_number, bool) or not isinstance(cycle_number, int):
        raise InvalidArgumentError(f"Cycle number must be an integer, got {cycle_number!r}")
    if cycle_number < 1:
        raise InvalidArgumentError(f"Cycle number must be >= 1, got {cycle_number}")


def build_cycle(cycle_number: int) -> WorkCycle:
    """Build the cycle with the given 1-based number.

    Args:
        cycle_number: Cycle number, counted from SYSTEM_START_DATE.

    Returns:
        The WorkCycle. Equal inputs always give equal cycles.

    Raises:
        InvalidArgumentError: If cycle_number is not a positive integer
            or the cycle would end past the last representable date.
    """
    _validate_cycle_number(cycle_number)
    try:
        return _build_cycle(cycle_number)
    except OverflowError as e:
        raise InvalidArgumentError(f"Cycle {cycle_number} is outside the supported date range") from e


@lru_cache(maxsize=512)
def _build_cycle(cycle_number: int) -> WorkCycle:
    work_start = add_days(SYSTEM_START_DATE, (cycle_number - 1) * CYCLE_LENGTH)
    work_end = add_days(work_start, WORK_DAYS - 1)
    rest_start = add_days(work_end, 1)
    rest_end = add_days(rest_start, REST_DAYS - 1)

    return WorkCycle(
        cycle_number=cycle_number,
        work_start=work_start,
        work_end=work_end,
        rest_start=rest_start,
        rest_end=rest_end,
        next_cycle_start=add_days(rest_end, 1),
        label=f"Cycle {cycle_number}: {format_short(work_start)} - {format_short(work_end)}",
        work_days=date_range(work_start, WORK_DAYS),
        rest_days=date_range(rest_start, REST_DAYS),
    )


def initial_cycles(count: int = 20) -> list[WorkCycle]:
    """The first ``count`` cycles of the system."""
    if count < 1:
        raise InvalidArgumentError(f"Count must be >= 1, got {count}")
    return [build_cycle(n) for n in range(1, count + 1)]
