"""Locating dates and "today" within the cycle calendar.

Every function that depends on the current day takes an optional
``reference`` date. When omitted, the system clock is read once at the
top of the call; callers computing several values for one request should
read the clock themselves and pass the same reference to each.
"""

from datetime import date
from decimal import Decimal

from cycletrack.core.exceptions import InvalidArgumentError
from cycletrack.core.models import CycleFlags, CycleInfo, CycleSelection, CycleStatus, WorkCycle
from cycletrack.engine.calendar import DateLike, days_between, from_canonical, same_day, today
from cycletrack.engine.cycles import (
    CYCLE_LENGTH,
    SYSTEM_START_DATE,
    WORK_DAYS,
    build_cycle,
)


def _reference_or_today(reference: DateLike | None) -> date:
    if reference is None:
        return today()
    return from_canonical(reference)


def cycle_number_for_date(value: DateLike) -> int:
    """Get the number of the cycle containing a date.

    Returns:
        The 1-based cycle number, or 0 if the date is before
        SYSTEM_START_DATE.
    """
    d = from_canonical(value)
    if d < SYSTEM_START_DATE:
        return 0
    return days_between(SYSTEM_START_DATE, d) // CYCLE_LENGTH + 1


def cycle_for_date(value: DateLike) -> WorkCycle | None:
    """Get the cycle containing a date, or None before the system start."""
    number = cycle_number_for_date(value)
    if number == 0:
        return None
    return build_cycle(number)


def current_cycle(reference: DateLike | None = None) -> WorkCycle:
    """Get the cycle containing the reference day.

    Before SYSTEM_START_DATE this returns cycle 1; use
    current_cycle_info() to tell that case apart.
    """
    number = cycle_number_for_date(_reference_or_today(reference))
    return build_cycle(max(1, number))


def cycles_window(count: int = 10, reference: DateLike | None = None) -> list[WorkCycle]:
    """Get ``count`` consecutive cycles centred on the current one.

    The window never starts below cycle 1, so early in the system's life
    it extends further into the future instead.

    Raises:
        InvalidArgumentError: If count is less than 1.
    """
    if count < 1:
        raise InvalidArgumentError(f"Count must be >= 1, got {count}")

    current_number = cycle_number_for_date(_reference_or_today(reference))
    start = max(1, current_number - count // 2)
    return [build_cycle(start + i) for i in range(count)]


def _index_of_day(day: date, days: tuple[date, ...]) -> int:
    """1-based position of ``day`` in ``days``, 0 if absent."""
    for i, candidate in enumerate(days):
        if same_day(day, candidate):
            return i + 1
    return 0


def current_cycle_info(reference: DateLike | None = None) -> CycleInfo:
    """Describe where the reference day sits in the cycle calendar.

    Returns:
        CycleInfo with day number within the cycle (1-14), position in
        the work (1-11) or rest (1-3) period, days until the next cycle
        starts and the status. Before SYSTEM_START_DATE all positions are
        0 and ``days_until_next_cycle`` counts down to the system start.
    """
    ref = _reference_or_today(reference)

    if ref < SYSTEM_START_DATE:
        return CycleInfo(
            cycle=build_cycle(1),
            reference_date=ref,
            day_number=0,
            work_day_number=0,
            rest_day_number=0,
            days_until_next_cycle=days_between(ref, SYSTEM_START_DATE),
            status=CycleStatus.BEFORE_SYSTEM,
        )

    cycle = build_cycle(cycle_number_for_date(ref))
    work_day_number = _index_of_day(ref, cycle.work_days)
    rest_day_number = _index_of_day(ref, cycle.rest_days)

    return CycleInfo(
        cycle=cycle,
        reference_date=ref,
        day_number=days_between(cycle.work_start, ref) + 1,
        work_day_number=work_day_number,
        rest_day_number=rest_day_number,
        days_until_next_cycle=max(0, days_between(ref, cycle.next_cycle_start)),
        status=CycleStatus.WORK if work_day_number else CycleStatus.REST,
    )


def cycle_progress(reference: DateLike | None = None) -> Decimal:
    """Percentage of the current cycle elapsed, counting today (0-100)."""
    info = current_cycle_info(reference)
    if info.status == CycleStatus.BEFORE_SYSTEM:
        return Decimal(0)
    return min(Decimal(100), Decimal(info.day_number) / CYCLE_LENGTH * 100)


def work_progress(reference: DateLike | None = None) -> Decimal:
    """Percentage of the current work period elapsed (0-100).

    Rest days report 100: the cycle's work period is complete.
    """
    info = current_cycle_info(reference)
    if info.status == CycleStatus.REST:
        return Decimal(100)
    if info.status != CycleStatus.WORK:
        return Decimal(0)
    return min(Decimal(100), Decimal(info.work_day_number) / WORK_DAYS * 100)


def is_in_work_period(value: DateLike, cycle: WorkCycle) -> bool:
    """Check whether a date is one of the cycle's work days."""
    return any(same_day(value, day) for day in cycle.work_days)


def is_in_rest_period(value: DateLike, cycle: WorkCycle) -> bool:
    """Check whether a date is one of the cycle's rest days."""
    return any(same_day(value, day) for day in cycle.rest_days)


def cycle_flags(cycle: WorkCycle, reference: DateLike | None = None) -> CycleFlags:
    """Compute whether the reference day is in, working in or resting in a cycle."""
    ref = _reference_or_today(reference)
    return CycleFlags(
        cycle_number=cycle.cycle_number,
        reference_date=ref,
        is_active=cycle.work_start <= ref <= cycle.rest_end,
        is_work_period=is_in_work_period(ref, cycle),
        is_rest_period=is_in_rest_period(ref, cycle),
    )


def select_cycles(
    selection: CycleSelection,
    reference: DateLike | None = None,
    window: int = 12,
    recent: int = 8,
) -> list[WorkCycle]:
    """Pick the cycles a report covers.

    Args:
        selection: CURRENT for the current cycle only, RECENT for the
            last ``recent`` cycles of the window, ALL for the whole window.
        reference: Reference day (defaults to today).
        window: Size of the window centred on the current cycle.
        recent: Number of cycles kept by RECENT.

    Returns:
        Cycles in ascending order.
    """
    if recent < 1:
        raise InvalidArgumentError(f"Recent cycle count must be >= 1, got {recent}")
    ref = _reference_or_today(reference)

    if selection == CycleSelection.CURRENT:
        return [current_cycle_info(ref).cycle]

    cycles = cycles_window(window, ref)
    if selection == CycleSelection.RECENT:
        return cycles[-recent:]
    return cycles
