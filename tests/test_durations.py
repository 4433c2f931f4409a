"""
Tests for the overtime-aware duration splitter.
"""

import pytest

from agendaboard.domain.durations import (
    EVENING_OVERTIME,
    MORNING_OVERTIME,
    split_duration,
    split_interval,
    split_times,
    window_overlap,
)
from agendaboard.domain.exceptions import InvalidTimeError
from agendaboard.domain.models import DurationBreakdown, Interval, parse_time_of_day


def _split(start: str, end: str) -> DurationBreakdown:
    return split_duration(parse_time_of_day(start), parse_time_of_day(end))


class TestSplitDuration:
    """Tests for split_duration."""

    @pytest.mark.parametrize(
        "start, end, total, normal, overtime",
        [
            ("10:00", "19:00", 540, 540, 0),
            ("07:00", "10:00", 180, 0, 180),
            ("19:00", "23:00", 240, 0, 240),
            ("08:00", "12:00", 240, 120, 120),
            ("17:00", "21:00", 240, 120, 120),
            ("07:00", "23:00", 960, 540, 420),
            ("14:00", "14:30", 30, 30, 0),
            ("18:00", "22:00", 240, 60, 180),
        ],
    )
    def test_known_intervals(self, start, end, total, normal, overtime):
        """Test the breakdown of representative blocks."""
        assert _split(start, end) == DurationBreakdown(total=total, normal=normal, overtime=overtime)

    def test_partial_minutes_are_not_rounded(self):
        """Test a block crossing 10:00 at a non-hour boundary."""
        result = _split("09:47", "10:13")

        assert result.overtime == 13
        assert result.normal == 13

    def test_hours_outside_scheduling_day_are_normal(self):
        """Only the two windows count as overtime."""
        assert _split("05:00", "07:00") == DurationBreakdown(120, 120, 0)
        assert _split("23:00", "23:59") == DurationBreakdown(59, 59, 0)

    @pytest.mark.parametrize("start, end", [(600, 600), (720, 600), (1380, 0)])
    def test_inverted_interval_yields_zeros(self, start, end):
        """Test that end <= start never produces negative minutes."""
        assert split_duration(start, end) == DurationBreakdown(0, 0, 0)

    def test_conservation_and_non_negativity(self):
        """normal + overtime == total for every quarter-hour interval of the day."""
        for start in range(0, 24 * 60, 15):
            for end in range(start + 15, 24 * 60 + 1, 15):
                result = split_duration(start, end)
                assert result.total == end - start
                assert result.normal + result.overtime == result.total
                assert result.normal >= 0 and result.overtime >= 0

    def test_inside_a_window_is_all_overtime(self):
        """Intervals contained in a window are fully overtime."""
        for window_start, window_end in (MORNING_OVERTIME, EVENING_OVERTIME):
            result = split_duration(window_start + 30, window_end - 15)
            assert result.overtime == result.total
            assert result.normal == 0


class TestHelpers:
    """Tests for the convenience wrappers."""

    def test_window_overlap(self):
        """Test overlap of an interval with a single window."""
        assert window_overlap(480, 720, MORNING_OVERTIME) == 120
        assert window_overlap(600, 700, MORNING_OVERTIME) == 0

    def test_split_interval(self):
        """Test splitting an Interval."""
        assert split_interval(Interval.from_strings("08:00", "12:00")).normal == 120

    def test_split_interval_agrees_with_split_duration(self):
        """Test that the interval path matches the raw minute path."""
        for start in range(0, 24 * 60, 30):
            for end in range(start + 30, 24 * 60 + 1, 90):
                assert split_interval(Interval(start, end)) == split_duration(start, end)

    def test_split_times(self):
        """Test splitting wire strings."""
        assert split_times("10:00", "18:00") == DurationBreakdown(480, 480, 0)

    def test_split_times_rejects_malformed_input(self):
        """Test that malformed strings are reported, not split."""
        with pytest.raises(InvalidTimeError):
            split_times("10h", "18:00")

    def test_as_block_fields(self):
        """Test the stored field names of a breakdown."""
        assert DurationBreakdown(240, 120, 120).as_block_fields() == {
            "duration_total_min": 240,
            "duration_normal_min": 120,
            "duration_overtime_min": 120,
        }
