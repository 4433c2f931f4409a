"""
Monthly report generation from stored blocks.
"""

from __future__ import annotations

from typing import List, Optional, Protocol

from pendulum import Date

from ..domain.models import ActivityType, Professional, ScheduleBlock
from ..domain.reports import MonthlyReport, build_monthly_report, month_bounds


class ReportStoreProtocol(Protocol):
    def list_blocks_between(
        self,
        start: Date,
        end: Date,
        professional_id: Optional[int] = None,
    ) -> List[ScheduleBlock]: ...

    def list_professionals(self, include_inactive: bool = False) -> List[Professional]: ...

    def list_activity_types(self) -> List[ActivityType]: ...


class ReportService:
    def __init__(self, store: ReportStoreProtocol) -> None:
        self._store = store

    def monthly(self, year: int, month: int, professional_id: Optional[int] = None) -> MonthlyReport:
        """
        Build the hour report of one month, optionally for one professional.

        Raises:
            ReportRequestError: If year or month is out of range
        """
        first_day, last_day = month_bounds(year, month)
        rows = self._store.list_blocks_between(first_day, last_day, professional_id)

        # Deactivated professionals keep their names in historical reports
        return build_monthly_report(
            year,
            month,
            rows,
            self._store.list_professionals(include_inactive=True),
            self._store.list_activity_types(),
        )
