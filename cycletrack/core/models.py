"""Domain models for CycleTrack.

All data structures are defined here using Pydantic v2 for validation.
Cycles and aggregates are derived values: they are recomputed on every
query and never persisted.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from cycletrack.engine.calendar import from_canonical

# -----------------------------------------------------------------------------
# Enums
# -----------------------------------------------------------------------------


class EntryType(str, Enum):
    """Kind of financial entry.

    EXPENSE: Operating cost. Lowers efficiency, not the balance.
    INCOME: Money earned.
    INVESTMENT: Capital put to work. Subtracted from the balance.
    """

    EXPENSE = "expense"
    INCOME = "income"
    INVESTMENT = "investment"


class CycleStatus(str, Enum):
    """Where a reference day sits relative to the cycle calendar."""

    WORK = "work"
    REST = "rest"
    BEFORE_SYSTEM = "before-system"


class CycleSelection(str, Enum):
    """Which cycles a report covers."""

    CURRENT = "current"
    RECENT = "recent"
    ALL = "all"


class InsightLevel(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"


# -----------------------------------------------------------------------------
# Financial Entry Model
# -----------------------------------------------------------------------------


class FinancialEntry(BaseModel):
    """A single financial entry.

    Attributes:
        id: Unique identifier (auto-generated).
        type: expense, income or investment.
        category: Free-text category.
        amount: Non-negative amount.
        date: Calendar day of the entry (accepts ``YYYY-MM-DD``).
        description: Optional free text.
        created_at: Record creation timestamp.
        updated_at: Last modification timestamp.
    """

    id: str = Field(default_factory=lambda: uuid4().hex)
    type: EntryType
    category: str = Field(min_length=1)
    amount: Annotated[Decimal, Field(ge=0)]
    date: date
    description: str | None = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @field_validator("date", mode="before")
    @classmethod
    def parse_canonical_date(cls, value: object) -> object:
        """Parse canonical strings without generic date parsing."""
        if isinstance(value, (str, date)):
            return from_canonical(value)
        return value


# -----------------------------------------------------------------------------
# Work Cycle Models
# -----------------------------------------------------------------------------


class WorkCycle(BaseModel):
    """One 14-day cycle: 11 work days followed by 3 rest days.

    A cycle is a pure function of its number. Whether "today" falls
    inside it is not part of the value; see CycleFlags.
    """

    model_config = ConfigDict(frozen=True)

    cycle_number: int = Field(ge=1)
    work_start: date
    work_end: date
    rest_start: date
    rest_end: date
    next_cycle_start: date
    label: str
    work_days: tuple[date, ...]
    rest_days: tuple[date, ...]

    @computed_field  # type: ignore[misc]
    @property
    def days(self) -> tuple[date, ...]:
        """All 14 days of the cycle in order."""
        return self.work_days + self.rest_days


class CycleFlags(BaseModel):
    """Position of a reference day relative to one cycle."""

    cycle_number: int
    reference_date: date
    is_active: bool
    is_work_period: bool
    is_rest_period: bool


class CycleInfo(BaseModel):
    """Current position within the cycle calendar.

    Before the epoch, ``cycle`` is cycle 1 for completeness only and
    must not be treated as current.
    """

    cycle: WorkCycle
    reference_date: date
    day_number: int = Field(ge=0, le=14)
    work_day_number: int = Field(ge=0, le=11)
    rest_day_number: int = Field(ge=0, le=3)
    days_until_next_cycle: int = Field(ge=0)
    status: CycleStatus


# -----------------------------------------------------------------------------
# Aggregated Data Models
# -----------------------------------------------------------------------------


class CycleAggregate(BaseModel):
    """Financial summary of one cycle.

    ``entries`` is the work entries followed by the rest entries.
    Ratios are percentages; all of them are 0 when their divisor is 0.
    """

    cycle: WorkCycle
    entries: list[FinancialEntry] = Field(default_factory=list)
    work_entries: list[FinancialEntry] = Field(default_factory=list)
    rest_entries: list[FinancialEntry] = Field(default_factory=list)

    income: Decimal = Decimal(0)
    expense: Decimal = Decimal(0)
    investment: Decimal = Decimal(0)
    balance: Decimal = Decimal(0)  # income - investment

    roi: Decimal = Decimal(0)
    efficiency: Decimal = Decimal(0)
    productivity: Decimal = Decimal(0)  # income per work entry
    burn_rate: Decimal = Decimal(0)  # expense per work day
    investment_ratio: Decimal = Decimal(0)
    active_days: int = 0


class PortfolioSummary(BaseModel):
    """Statistics across a sequence of cycle aggregates."""

    cycle_count: int = 0

    total_income: Decimal = Decimal(0)
    total_expense: Decimal = Decimal(0)
    total_investment: Decimal = Decimal(0)
    total_balance: Decimal = Decimal(0)

    avg_roi: Decimal = Decimal(0)
    avg_efficiency: Decimal = Decimal(0)
    avg_productivity: Decimal = Decimal(0)
    avg_burn_rate: Decimal = Decimal(0)
    avg_investment_ratio: Decimal = Decimal(0)

    best_cycle: CycleAggregate | None = None
    worst_cycle: CycleAggregate | None = None

    consistency_score: Decimal = Decimal(0)
    growth_rate: Decimal = Decimal(0)
    total_active_days: int = 0


class DailyTotals(BaseModel):
    """Per-type totals for one day (or any other span of days)."""

    income: Decimal = Decimal(0)
    expense: Decimal = Decimal(0)
    investment: Decimal = Decimal(0)
    entries: list[FinancialEntry] = Field(default_factory=list)

    @computed_field  # type: ignore[misc]
    @property
    def balance(self) -> Decimal:
        return self.income - self.investment


class CalendarDay(BaseModel):
    """One day of a month calendar.

    ``cycle_number`` is 0 and ``status`` is BEFORE_SYSTEM for days
    before the system start.
    """

    date: date
    cycle_number: int = Field(ge=0)
    status: CycleStatus
    totals: DailyTotals = Field(default_factory=DailyTotals)


class MonthCalendar(BaseModel):
    """Every day of one calendar month with its totals."""

    year: int
    month: int = Field(ge=1, le=12)
    days: list[CalendarDay] = Field(default_factory=list)
    totals: DailyTotals = Field(default_factory=DailyTotals)


class CategoryShare(BaseModel):
    """One category's total within an entry type."""

    category: str
    amount: Decimal
    percentage: Decimal = Decimal(0)  # Share of the type's total
    entry_count: int = 0


class CategoryBreakdown(BaseModel):
    """Categories per entry type, largest first."""

    expense: list[CategoryShare] = Field(default_factory=list)
    income: list[CategoryShare] = Field(default_factory=list)
    investment: list[CategoryShare] = Field(default_factory=list)


class Insight(BaseModel):
    """A short observation shown alongside a report."""

    level: InsightLevel
    title: str
    message: str


# -----------------------------------------------------------------------------
# Report Models
# -----------------------------------------------------------------------------


class CycleOverview(BaseModel):
    """The current cycle at a glance."""

    info: CycleInfo
    cycle_progress: Decimal
    work_progress: Decimal
    aggregate: CycleAggregate


class CycleReport(BaseModel):
    """Everything a report over several cycles needs.

    Built in one pass against a single reference date.
    """

    generated_at: datetime
    reference_date: date
    currency: str
    selection: CycleSelection

    info: CycleInfo
    cycle_progress: Decimal = Decimal(0)
    work_progress: Decimal = Decimal(0)

    aggregates: list[CycleAggregate] = Field(default_factory=list)
    summary: PortfolioSummary = Field(default_factory=PortfolioSummary)
    categories: CategoryBreakdown = Field(default_factory=CategoryBreakdown)
    insights: list[Insight] = Field(default_factory=list)
