"""
Domain models for time-of-day intervals, schedule blocks and catalog entries.
"""

import re
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional

import pendulum
from pendulum import Date

from .exceptions import InvalidIntervalError, InvalidTimeError

TIME_OF_DAY_PATTERN = re.compile(r"^\d{2}:\d{2}$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

MINUTES_PER_DAY = 24 * 60

# Bounds of the scheduling day shown on the board
DAY_START = 7 * 60
DAY_END = 23 * 60

DEFAULT_PROFESSIONAL_COLOR = "#6366f1"


def parse_time_of_day(value: str) -> int:
    """
    Parse an ``HH:MM`` string into minutes since midnight.

    Raises:
        InvalidTimeError: If the value is not a zero-padded 24-hour time
    """
    if not isinstance(value, str) or not TIME_OF_DAY_PATTERN.match(value):
        raise InvalidTimeError(f"Time must use the HH:MM format, got {value!r}")

    hours, minutes = (int(part) for part in value.split(":"))
    if hours > 23 or minutes > 59:
        raise InvalidTimeError(f"Time out of range: {value}")

    return hours * 60 + minutes


def format_time_of_day(minutes: int) -> str:
    """Format minutes since midnight as ``HH:MM``."""
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def parse_date(value) -> Date:
    """
    Parse a ``YYYY-MM-DD`` string into a pendulum Date.

    Date instances are returned unchanged.
    """
    if isinstance(value, Date):
        return value

    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        raise InvalidTimeError(f"Date must use the YYYY-MM-DD format, got {value!r}")

    try:
        return pendulum.from_format(value, "YYYY-MM-DD").date()
    except ValueError as exc:
        raise InvalidTimeError(f"Invalid date {value!r}: {exc}") from exc


def format_date(value: Date) -> str:
    return value.to_date_string()


@dataclass(frozen=True)
class Interval:
    """
    A half-open range of minutes within one day.

    Invariant: start must be before end.
    """
    start: int
    end: int

    def __post_init__(self):
        if self.end <= self.start:
            raise InvalidIntervalError(
                f"End time {format_time_of_day(self.end)} must be after "
                f"start time {format_time_of_day(self.start)}"
            )

    @classmethod
    def from_strings(cls, start: str, end: str) -> "Interval":
        """Build an interval from two ``HH:MM`` strings."""
        return cls(start=parse_time_of_day(start), end=parse_time_of_day(end))

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return self.end - self.start

    def overlaps(self, other: "Interval") -> bool:
        """Check if this range overlaps with another. Touching ranges do not."""
        return self.start < other.end and self.end > other.start

    def intersect(self, other: "Interval") -> "Interval | None":
        """
        Calculate the intersection of two intervals.
        Returns None if there is no overlap.
        """
        if not self.overlaps(other):
            return None

        return Interval(start=max(self.start, other.start), end=min(self.end, other.end))

    def __str__(self) -> str:
        return f"{format_time_of_day(self.start)} - {format_time_of_day(self.end)}"


@dataclass(frozen=True)
class DurationBreakdown:
    """Minutes of a block split into normal and overtime."""
    total: int = 0
    normal: int = 0
    overtime: int = 0

    def as_block_fields(self) -> Dict[str, int]:
        """Return the breakdown keyed by the stored block field names."""
        return {
            "duration_total_min": self.total,
            "duration_normal_min": self.normal,
            "duration_overtime_min": self.overtime,
        }


@dataclass
class ScheduleBlock:
    """
    A professional assigned to an activity for one date and time interval.

    Times are kept as minutes since midnight; the duration fields are the
    values computed when the block was last written.
    """
    id: int
    professional_id: int
    date: Date
    start_time: int
    end_time: int
    activity_type_id: Optional[int] = None
    requester_id: Optional[int] = None
    job_number: Optional[str] = None
    job_name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    created_by: Optional[int] = None
    duration_total_min: int = 0
    duration_normal_min: int = 0
    duration_overtime_min: int = 0

    @property
    def interval(self) -> Interval:
        return Interval(start=self.start_time, end=self.end_time)

    @property
    def durations(self) -> DurationBreakdown:
        return DurationBreakdown(
            total=self.duration_total_min,
            normal=self.duration_normal_min,
            overtime=self.duration_overtime_min,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the wire formats for dates and times."""
        data = asdict(self)
        data["date"] = format_date(self.date)
        data["start_time"] = format_time_of_day(self.start_time)
        data["end_time"] = format_time_of_day(self.end_time)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScheduleBlock":
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in data.items() if key in known}
        values["date"] = parse_date(values["date"])
        values["start_time"] = _coerce_minutes(values["start_time"])
        values["end_time"] = _coerce_minutes(values["end_time"])
        return cls(**values)


@dataclass
class BlockDraft:
    """Payload for creating a block, before an id and durations are assigned."""
    professional_id: int
    date: Date
    start_time: int
    end_time: int
    activity_type_id: Optional[int] = None
    requester_id: Optional[int] = None
    job_number: Optional[str] = None
    job_name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None

    @classmethod
    def from_wire(cls, *, date: str, start_time: str, end_time: str, **metadata) -> "BlockDraft":
        """Build a draft from ``YYYY-MM-DD`` and ``HH:MM`` strings."""
        return cls(
            date=parse_date(date),
            start_time=parse_time_of_day(start_time),
            end_time=parse_time_of_day(end_time),
            **metadata,
        )


@dataclass
class BlockUpdate:
    """
    Partial update of a block. ``None`` means the field was not supplied.
    """
    professional_id: Optional[int] = None
    date: Optional[Date] = None
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    activity_type_id: Optional[int] = None
    requester_id: Optional[int] = None
    job_number: Optional[str] = None
    job_name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None

    def supplied_fields(self) -> Dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    @property
    def touches_interval(self) -> bool:
        return self.start_time is not None or self.end_time is not None


@dataclass
class Professional:
    id: int
    name: str
    column_order: int = 0
    color: str = DEFAULT_PROFESSIONAL_COLOR
    active: bool = True
    group_label: str = "principal"


@dataclass
class Requester:
    id: int
    name: str
    active: bool = True


@dataclass
class ActivityType:
    id: int
    name: str
    color: str


def _coerce_minutes(value) -> int:
    if isinstance(value, int):
        return value
    return parse_time_of_day(value)
