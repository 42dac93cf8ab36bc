"""Bucketing financial entries into cycles.

Aggregates are derived from the full entry collection on every call;
filtering by cycle happens here, so callers always pass all entries.
"""

from collections.abc import Iterable, Sequence
from decimal import Decimal

from cycletrack.core.models import (
    CategoryBreakdown,
    CategoryShare,
    CycleAggregate,
    DailyTotals,
    EntryType,
    FinancialEntry,
    WorkCycle,
)
from cycletrack.engine.calendar import same_day, to_canonical
from cycletrack.engine.cycles import WORK_DAYS
from cycletrack.engine.locator import is_in_rest_period, is_in_work_period


def _sum_by_type(entries: Iterable[FinancialEntry], entry_type: EntryType) -> Decimal:
    return sum((e.amount for e in entries if e.type == entry_type), Decimal(0))


def _percentage(part: Decimal, whole: Decimal) -> Decimal:
    """``part / whole * 100``, or 0 when whole is not positive."""
    if whole <= 0:
        return Decimal(0)
    return part / whole * 100


def aggregate(entries: Iterable[FinancialEntry], cycle: WorkCycle) -> CycleAggregate:
    """Aggregate the entries that fall inside a cycle.

    Args:
        entries: Any entry collection; entries outside the cycle are ignored.
        cycle: The cycle to aggregate.

    Returns:
        CycleAggregate with sums and derived ratios. Balance is
        income - investment: expenses are operating cost and only lower
        efficiency.
    """
    entries = list(entries)
    work_entries = [e for e in entries if is_in_work_period(e.date, cycle)]
    rest_entries = [e for e in entries if is_in_rest_period(e.date, cycle)]
    cycle_entries = work_entries + rest_entries

    income = _sum_by_type(cycle_entries, EntryType.INCOME)
    expense = _sum_by_type(cycle_entries, EntryType.EXPENSE)
    investment = _sum_by_type(cycle_entries, EntryType.INVESTMENT)
    balance = income - investment

    productivity = income / len(work_entries) if work_entries else Decimal(0)
    active_days = sum(
        1 for day in cycle.work_days if any(same_day(e.date, day) for e in work_entries)
    )

    return CycleAggregate(
        cycle=cycle,
        entries=cycle_entries,
        work_entries=work_entries,
        rest_entries=rest_entries,
        income=income,
        expense=expense,
        investment=investment,
        balance=balance,
        roi=_percentage(balance, investment),
        efficiency=_percentage(income - expense - investment, income),
        productivity=productivity,
        burn_rate=expense / WORK_DAYS,
        investment_ratio=_percentage(investment, income),
        active_days=active_days,
    )


def aggregate_many(
    entries: Iterable[FinancialEntry],
    cycles: Sequence[WorkCycle],
) -> list[CycleAggregate]:
    """Aggregate entries for several cycles.

    Cycles without any entries are dropped, so the result can be
    shorter than ``cycles``.
    """
    entries = list(entries)
    aggregates = (aggregate(entries, cycle) for cycle in cycles)
    return [agg for agg in aggregates if agg.entries]


def _add_to_totals(totals: DailyTotals, entry: FinancialEntry) -> None:
    totals.entries.append(entry)
    if entry.type == EntryType.INCOME:
        totals.income += entry.amount
    elif entry.type == EntryType.EXPENSE:
        totals.expense += entry.amount
    else:
        totals.investment += entry.amount


def daily_totals(entries: Iterable[FinancialEntry]) -> dict[str, DailyTotals]:
    """Group entries by calendar day.

    Returns:
        Mapping of canonical date string to that day's totals, in order
        of first appearance.
    """
    by_day: dict[str, DailyTotals] = {}
    for entry in entries:
        key = to_canonical(entry.date)
        _add_to_totals(by_day.setdefault(key, DailyTotals()), entry)
    return by_day


def month_totals(entries: Iterable[FinancialEntry], year: int, month: int) -> DailyTotals:
    """Totals over all entries dated in one calendar month."""
    totals = DailyTotals()
    for entry in entries:
        if entry.date.year == year and entry.date.month == month:
            _add_to_totals(totals, entry)
    return totals


def _category_shares(entries: list[FinancialEntry], entry_type: EntryType) -> list[CategoryShare]:
    matching = [e for e in entries if e.type == entry_type]
    total = _sum_by_type(matching, entry_type)

    amounts: dict[str, Decimal] = {}
    counts: dict[str, int] = {}
    for entry in matching:
        amounts[entry.category] = amounts.get(entry.category, Decimal(0)) + entry.amount
        counts[entry.category] = counts.get(entry.category, 0) + 1

    shares = [
        CategoryShare(
            category=category,
            amount=amount,
            percentage=_percentage(amount, total),
            entry_count=counts[category],
        )
        for category, amount in amounts.items()
    ]
    return sorted(shares, key=lambda s: (-s.amount, s.category))


def category_breakdown(entries: Iterable[FinancialEntry]) -> CategoryBreakdown:
    """Break entries down by category within each entry type.

    Each list is sorted by amount, largest first; percentages are shares
    of that type's total.
    """
    entries = list(entries)
    return CategoryBreakdown(
        expense=_category_shares(entries, EntryType.EXPENSE),
        income=_category_shares(entries, EntryType.INCOME),
        investment=_category_shares(entries, EntryType.INVESTMENT),
    )
