"""
Overtime-aware duration splitting.

A block's minutes are split against two fixed daily overtime windows. This is
pure domain logic: no I/O, no state, and no errors for any integer input.
"""

from typing import Tuple

from .models import DurationBreakdown, Interval, parse_time_of_day

# Overtime windows as [start, end) minutes since midnight. They never overlap
# each other, so summing per-window overlaps counts every minute at most once.
MORNING_OVERTIME: Tuple[int, int] = (7 * 60, 10 * 60)
EVENING_OVERTIME: Tuple[int, int] = (19 * 60, 23 * 60)
OVERTIME_WINDOWS: Tuple[Tuple[int, int], ...] = (MORNING_OVERTIME, EVENING_OVERTIME)


def window_overlap(start: int, end: int, window: Tuple[int, int]) -> int:
    """Return how many minutes of [start, end) fall inside the window."""
    window_start, window_end = window
    return max(0, min(end, window_end) - max(start, window_start))


def split_duration(start: int, end: int) -> DurationBreakdown:
    """
    Split [start, end) into total, normal and overtime minutes.

    Example:
        08:00 - 12:00 -> total 240, overtime 120 (08:00-10:00), normal 120

    An interval that does not end after it starts yields an all-zero
    breakdown instead of negative minutes.
    """
    total = max(0, end - start)
    if total == 0:
        return DurationBreakdown()

    overtime = sum(window_overlap(start, end, window) for window in OVERTIME_WINDOWS)

    return DurationBreakdown(
        total=total,
        normal=max(0, total - overtime),
        overtime=max(0, overtime),
    )


def split_interval(interval: Interval) -> DurationBreakdown:
    """Split a validated interval by intersecting it with each overtime window."""
    overtime = 0
    for window_start, window_end in OVERTIME_WINDOWS:
        shared = interval.intersect(Interval(start=window_start, end=window_end))
        if shared is not None:
            overtime += shared.duration_minutes()

    total = interval.duration_minutes()
    return DurationBreakdown(total=total, normal=total - overtime, overtime=overtime)


def split_times(start_time: str, end_time: str) -> DurationBreakdown:
    """
    Split two ``HH:MM`` strings.

    Raises:
        InvalidTimeError: If either string is malformed
    """
    return split_duration(parse_time_of_day(start_time), parse_time_of_day(end_time))
