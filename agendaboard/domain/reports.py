"""
Monthly hour reports built from stored block durations.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

import pendulum
from pendulum import Date

from .exceptions import ReportRequestError
from .models import ActivityType, Professional, ScheduleBlock

MIN_REPORT_YEAR = 2020
MAX_REPORT_YEAR = 2100

UNKNOWN_ACTIVITY_TYPE = "Unknown"


def month_bounds(year: int, month: int) -> Tuple[Date, Date]:
    """
    Return the first and last day of a month.

    Raises:
        ReportRequestError: If year or month is outside the supported range
    """
    if not MIN_REPORT_YEAR <= year <= MAX_REPORT_YEAR:
        raise ReportRequestError(
            f"Year must be between {MIN_REPORT_YEAR} and {MAX_REPORT_YEAR}, got {year}"
        )
    if not 1 <= month <= 12:
        raise ReportRequestError(f"Month must be between 1 and 12, got {month}")

    first_day = pendulum.date(year, month, 1)
    return first_day, first_day.end_of("month")


@dataclass
class ActivityTypeTotal:
    type_id: int
    type_name: str
    total_min: int = 0


@dataclass
class ProfessionalSummary:
    """Aggregated minutes of one professional over the report period."""
    professional_id: int
    professional_name: str
    total_min: int = 0
    normal_min: int = 0
    overtime_min: int = 0
    by_type: Dict[int, ActivityTypeTotal] = field(default_factory=dict)
    entries: List[ScheduleBlock] = field(default_factory=list)

    def add(self, block: ScheduleBlock, type_name: Optional[str]) -> None:
        self.total_min += block.duration_total_min
        self.normal_min += block.duration_normal_min
        self.overtime_min += block.duration_overtime_min
        self.entries.append(block)

        if block.activity_type_id is None:
            return

        type_total = self.by_type.get(block.activity_type_id)
        if type_total is None:
            type_total = ActivityTypeTotal(
                type_id=block.activity_type_id,
                type_name=type_name or UNKNOWN_ACTIVITY_TYPE,
            )
            self.by_type[block.activity_type_id] = type_total
        type_total.total_min += block.duration_total_min


@dataclass
class MonthlyReport:
    year: int
    month: int
    rows: List[ScheduleBlock]
    summary: List[ProfessionalSummary]

    @property
    def total_min(self) -> int:
        return sum(item.total_min for item in self.summary)

    @property
    def overtime_min(self) -> int:
        return sum(item.overtime_min for item in self.summary)


def build_monthly_report(
    year: int,
    month: int,
    rows: Iterable[ScheduleBlock],
    professionals: Iterable[Professional],
    activity_types: Iterable[ActivityType],
) -> MonthlyReport:
    """
    Group block rows per professional.

    Summaries keep the order in which professionals first appear in ``rows``,
    which callers supply sorted by date and start time.
    """
    names = {professional.id: professional.name for professional in professionals}
    type_names = {activity_type.id: activity_type.name for activity_type in activity_types}

    row_list = list(rows)
    summary: Dict[int, ProfessionalSummary] = {}

    for row in row_list:
        entry = summary.get(row.professional_id)
        if entry is None:
            entry = ProfessionalSummary(
                professional_id=row.professional_id,
                professional_name=names.get(row.professional_id, f"Prof. {row.professional_id}"),
            )
            summary[row.professional_id] = entry

        entry.add(row, type_names.get(row.activity_type_id))

    return MonthlyReport(year=year, month=month, rows=row_list, summary=list(summary.values()))
