"""
Tests for block overlap detection.
"""

import pendulum

from agendaboard.domain.models import Interval, ScheduleBlock, parse_time_of_day
from agendaboard.domain.overlap import find_conflicts, has_conflict

DAY = pendulum.date(2024, 11, 25)


def _block(block_id: int, professional_id: int, start: str, end: str) -> ScheduleBlock:
    return ScheduleBlock(
        id=block_id,
        professional_id=professional_id,
        date=DAY,
        start_time=parse_time_of_day(start),
        end_time=parse_time_of_day(end),
    )


class TestOverlap:
    """Tests for find_conflicts and has_conflict."""

    def test_touching_blocks_do_not_conflict(self):
        """A block starting when another ends is accepted."""
        existing = [_block(1, 1, "10:00", "11:00")]

        assert not has_conflict(Interval.from_strings("09:00", "10:00"), 1, existing)
        assert not has_conflict(Interval.from_strings("11:00", "12:00"), 1, existing)

    def test_partial_overlap_conflicts(self):
        """A block sharing any minute with another is rejected."""
        existing = [_block(1, 1, "10:00", "11:00")]

        assert has_conflict(Interval.from_strings("09:30", "10:30"), 1, existing)

    def test_containment_conflicts_both_ways(self):
        """Enclosing and enclosed candidates both conflict."""
        existing = [_block(1, 1, "10:00", "11:00")]

        assert has_conflict(Interval.from_strings("10:15", "10:45"), 1, existing)
        assert has_conflict(Interval.from_strings("08:00", "12:00"), 1, existing)

    def test_other_professionals_never_conflict(self):
        """Overlapping times of a different professional are ignored."""
        existing = [_block(1, 2, "10:00", "11:00")]

        assert not has_conflict(Interval.from_strings("10:00", "11:00"), 1, existing)

    def test_excluded_block_is_ignored(self):
        """The block being updated is not compared with itself."""
        existing = [_block(1, 1, "10:00", "11:00"), _block(2, 1, "13:00", "14:00")]

        assert not has_conflict(Interval.from_strings("10:30", "11:30"), 1, existing, exclude_block_id=1)
        assert has_conflict(Interval.from_strings("10:30", "13:30"), 1, existing, exclude_block_id=1)

    def test_find_conflicts_returns_every_overlapping_block(self):
        """All overlapping blocks are reported in input order."""
        existing = [
            _block(1, 1, "08:00", "09:00"),
            _block(2, 1, "09:00", "10:00"),
            _block(3, 1, "12:00", "13:00"),
            _block(4, 2, "09:00", "10:00"),
        ]

        conflicts = find_conflicts(Interval.from_strings("08:30", "09:30"), 1, existing)

        assert [block.id for block in conflicts] == [1, 2]

    def test_empty_day_has_no_conflicts(self):
        """Nothing scheduled means nothing to conflict with."""
        assert find_conflicts(Interval.from_strings("07:00", "23:00"), 1, []) == []
