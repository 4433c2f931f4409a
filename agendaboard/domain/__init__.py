"""
Domain layer - Pure business logic without external dependencies.
"""

from .durations import OVERTIME_WINDOWS, split_duration, split_interval, split_times
from .models import (
    ActivityType,
    BlockDraft,
    BlockUpdate,
    DurationBreakdown,
    Interval,
    Professional,
    Requester,
    ScheduleBlock,
)
from .overlap import find_conflicts, has_conflict
from .reports import MonthlyReport, build_monthly_report, month_bounds

__all__ = [
    "ActivityType",
    "BlockDraft",
    "BlockUpdate",
    "DurationBreakdown",
    "Interval",
    "MonthlyReport",
    "OVERTIME_WINDOWS",
    "Professional",
    "Requester",
    "ScheduleBlock",
    "build_monthly_report",
    "find_conflicts",
    "has_conflict",
    "month_bounds",
    "split_duration",
    "split_interval",
    "split_times",
]
