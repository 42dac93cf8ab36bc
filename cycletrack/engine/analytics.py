"""Portfolio statistics across cycles.

Pure functions of an ordered list of cycle aggregates.
"""

from collections.abc import Sequence
from decimal import Decimal

from cycletrack.core.exceptions import EmptyInputError
from cycletrack.core.models import (
    CategoryBreakdown,
    CycleAggregate,
    Insight,
    InsightLevel,
    PortfolioSummary,
)

EFFICIENCY_INSIGHT_THRESHOLD = Decimal(30)
CONCENTRATION_INSIGHT_THRESHOLD = Decimal(40)


def require_non_empty(aggregates: Sequence[CycleAggregate]) -> Sequence[CycleAggregate]:
    """Return aggregates unchanged, raising EmptyInputError if there are none."""
    if not aggregates:
        raise EmptyInputError("At least one cycle with entries is required")
    return aggregates


def _mean(values: Sequence[Decimal]) -> Decimal:
    if not values:
        return Decimal(0)
    return sum(values, Decimal(0)) / len(values)


def calculate_consistency_score(efficiencies: Sequence[Decimal]) -> Decimal:
    """100 minus the population standard deviation of efficiency, floored at 0.

    A single cycle has no spread and scores 100.
    """
    if not efficiencies:
        return Decimal(0)
    mean = _mean(efficiencies)
    variance = sum(((e - mean) ** 2 for e in efficiencies), Decimal(0)) / len(efficiencies)
    return max(Decimal(0), 100 - variance.sqrt())


def calculate_growth_rate(balances: Sequence[Decimal]) -> Decimal:
    """Growth of the mean balance from the first half to the second half.

    The first half holds ``len // 2`` values, the second half the rest.

    Returns:
        Percentage change relative to the absolute first-half mean, or 0
        with fewer than two values or a zero first-half mean.
    """
    if len(balances) < 2:
        return Decimal(0)
    middle = len(balances) // 2
    first_mean = _mean(balances[:middle])
    second_mean = _mean(balances[middle:])
    if first_mean == 0:
        return Decimal(0)
    return (second_mean - first_mean) / abs(first_mean) * 100


def summarize(aggregates: Sequence[CycleAggregate]) -> PortfolioSummary:
    """Summarize a sequence of cycle aggregates.

    Args:
        aggregates: Aggregates in chronological order.

    Returns:
        PortfolioSummary. An empty input yields the all-zero summary with
        no best or worst cycle.
    """
    if not aggregates:
        return PortfolioSummary()

    total_income = sum((a.income for a in aggregates), Decimal(0))
    total_expense = sum((a.expense for a in aggregates), Decimal(0))
    total_investment = sum((a.investment for a in aggregates), Decimal(0))

    # max()/min() keep the first of equal keys
    best = max(aggregates, key=lambda a: a.balance)
    worst = min(aggregates, key=lambda a: a.balance)

    return PortfolioSummary(
        cycle_count=len(aggregates),
        total_income=total_income,
        total_expense=total_expense,
        total_investment=total_investment,
        total_balance=total_income - total_investment,
        avg_roi=_mean([a.roi for a in aggregates]),
        avg_efficiency=_mean([a.efficiency for a in aggregates]),
        avg_productivity=_mean([a.productivity for a in aggregates]),
        avg_burn_rate=_mean([a.burn_rate for a in aggregates]),
        avg_investment_ratio=_mean([a.investment_ratio for a in aggregates]),
        best_cycle=best,
        worst_cycle=worst,
        consistency_score=calculate_consistency_score([a.efficiency for a in aggregates]),
        growth_rate=calculate_growth_rate([a.balance for a in aggregates]),
        total_active_days=sum(a.active_days for a in aggregates),
    )


def generate_insights(summary: PortfolioSummary, categories: CategoryBreakdown) -> list[Insight]:
    """Derive highlights and warnings from a summary and category breakdown."""
    insights: list[Insight] = []

    if summary.avg_efficiency > EFFICIENCY_INSIGHT_THRESHOLD:
        insights.append(
            Insight(
                level=InsightLevel.SUCCESS,
                title="Excellent efficiency",
                message=f"Average efficiency of {summary.avg_efficiency:.1f}% across cycles",
            )
        )

    if summary.total_balance > 0:
        insights.append(
            Insight(
                level=InsightLevel.SUCCESS,
                title="Positive balance",
                message=f"Total surplus of {summary.total_balance:,.2f}",
            )
        )

    if summary.best_cycle is not None and summary.cycle_count > 1:
        best = summary.best_cycle
        insights.append(
            Insight(
                level=InsightLevel.SUCCESS,
                title="Best cycle",
                message=f"Cycle {best.cycle.cycle_number} with a balance of {best.balance:,.2f}",
            )
        )

    if categories.expense:
        top = categories.expense[0]
        if top.percentage > CONCENTRATION_INSIGHT_THRESHOLD:
            insights.append(
                Insight(
                    level=InsightLevel.WARNING,
                    title="Expense concentration",
                    message=f"{top.category} accounts for {top.percentage:.1f}% of expenses",
                )
            )

    return insights
