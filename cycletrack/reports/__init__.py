"""Report data for the CLI and other consumers."""

from cycletrack.reports.provider import CycleReportProvider

__all__ = ["CycleReportProvider"]
