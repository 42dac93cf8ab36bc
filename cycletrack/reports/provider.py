"""Cycle report provider.

Collects entries and computes everything a cycle report needs.
"""

import logging
from calendar import monthrange
from collections.abc import Callable
from datetime import date, datetime

from cycletrack.core.config import TrackerConfig
from cycletrack.core.models import (
    CalendarDay,
    CycleAggregate,
    CycleOverview,
    CycleReport,
    CycleSelection,
    CycleStatus,
    DailyTotals,
    MonthCalendar,
)
from cycletrack.engine.aggregator import (
    aggregate,
    aggregate_many,
    category_breakdown,
    daily_totals,
    month_totals,
)
from cycletrack.engine.analytics import generate_insights, summarize
from cycletrack.engine.calendar import Clock, date_range, to_canonical, today
from cycletrack.engine.locator import (
    current_cycle_info,
    cycle_progress,
    select_cycles,
    work_progress,
)
from cycletrack.storage.repository import EntryRepository, Unsubscribe

logger = logging.getLogger(__name__)


class CycleReportProvider:
    """Provides report data for a repository of entries.

    Every report is a full recomputation from the current entry list,
    computed against a single reading of the clock.
    """

    def __init__(
        self,
        repository: EntryRepository,
        config: TrackerConfig | None = None,
        clock: Clock | None = None,
    ):
        """Initialize report provider.

        Args:
            repository: Where entries come from.
            config: Tracker configuration (defaults if None).
            clock: Source of "today"; the system clock if None.
        """
        self.repository = repository
        self.config = config or TrackerConfig()
        self.clock = clock

    def reference_date(self) -> date:
        """Read the clock once."""
        return today(self.clock)

    def build_report(
        self,
        selection: CycleSelection = CycleSelection.RECENT,
        reference: date | None = None,
    ) -> CycleReport:
        """Build a report over the selected cycles.

        Args:
            selection: Which cycles to cover.
            reference: Reference day. If None, the clock is read once.

        Returns:
            CycleReport with per-cycle aggregates, portfolio summary,
            category breakdown and insights.
        """
        ref = reference or self.reference_date()
        entries = self.repository.list_entries()

        cycles = select_cycles(
            selection,
            reference=ref,
            window=self.config.window_size,
            recent=self.config.recent_cycles,
        )
        aggregates = aggregate_many(entries, cycles)
        summary = summarize(aggregates)

        # Categories over the entries that landed in the analysed cycles
        categories = category_breakdown(e for agg in aggregates for e in agg.entries)

        logger.info(
            "Built %s report for %s: %d of %d cycles with entries",
            selection.value,
            ref,
            len(aggregates),
            len(cycles),
        )

        return CycleReport(
            generated_at=datetime.now(),
            reference_date=ref,
            currency=self.config.currency,
            selection=selection,
            info=current_cycle_info(ref),
            cycle_progress=cycle_progress(ref),
            work_progress=work_progress(ref),
            aggregates=aggregates,
            summary=summary,
            categories=categories,
            insights=generate_insights(summary, categories),
        )

    def cycle_overview(self, reference: date | None = None) -> CycleOverview:
        """Current cycle position, progress and totals.

        Before the system start there is no current cycle, so the
        totals are empty.
        """
        ref = reference or self.reference_date()
        info = current_cycle_info(ref)
        if info.status == CycleStatus.BEFORE_SYSTEM:
            current = CycleAggregate(cycle=info.cycle)
        else:
            current = aggregate(self.repository.list_entries(), info.cycle)
        return CycleOverview(
            info=info,
            cycle_progress=cycle_progress(ref),
            work_progress=work_progress(ref),
            aggregate=current,
        )

    def month_calendar(self, year: int, month: int) -> MonthCalendar:
        """Every day of a calendar month with its cycle position and totals.

        Args:
            year: Calendar year.
            month: Calendar month (1-12).

        Returns:
            MonthCalendar with one CalendarDay per day of the month and
            the month's totals.
        """
        entries = self.repository.list_entries()
        by_day = daily_totals(entries)

        days = []
        for day in date_range(date(year, month, 1), monthrange(year, month)[1]):
            info = current_cycle_info(day)
            before_system = info.status == CycleStatus.BEFORE_SYSTEM
            days.append(
                CalendarDay(
                    date=day,
                    cycle_number=0 if before_system else info.cycle.cycle_number,
                    status=info.status,
                    totals=by_day.get(to_canonical(day), DailyTotals()),
                )
            )

        logger.info("Built calendar for %04d-%02d", year, month)
        return MonthCalendar(
            year=year,
            month=month,
            days=days,
            totals=month_totals(entries, year, month),
        )

    def watch(
        self,
        on_report: Callable[[CycleReport], None],
        selection: CycleSelection = CycleSelection.RECENT,
    ) -> Unsubscribe:
        """Rebuild the report whenever the repository changes.

        Args:
            on_report: Called with each fresh report.
            selection: Which cycles to cover.

        Returns:
            Function that stops watching.
        """

        def on_change() -> None:
            logger.debug("Entries changed, rebuilding report")
            on_report(self.build_report(selection))

        return self.repository.subscribe_to_changes(on_change)
