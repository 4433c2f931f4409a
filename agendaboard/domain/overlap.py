"""
Detection of time conflicts between schedule blocks.
"""

from typing import Iterable, List, Optional

from .models import Interval, ScheduleBlock


def find_conflicts(
    candidate: Interval,
    professional_id: int,
    existing: Iterable[ScheduleBlock],
    exclude_block_id: Optional[int] = None,
) -> List[ScheduleBlock]:
    """
    Return the existing blocks of the professional that overlap the candidate.

    Blocks are compared as half-open ranges: a candidate starting exactly when
    another block ends is not a conflict. ``existing`` must already be limited
    to the candidate's date.

    Args:
        candidate: Proposed time range
        professional_id: Owner of the proposed block
        existing: Blocks already scheduled on that date
        exclude_block_id: Id of the block being updated, never compared
    """
    conflicts: List[ScheduleBlock] = []

    for block in existing:
        if block.professional_id != professional_id:
            continue
        if exclude_block_id is not None and block.id == exclude_block_id:
            continue
        if candidate.start < block.end_time and candidate.end > block.start_time:
            conflicts.append(block)

    return conflicts


def has_conflict(
    candidate: Interval,
    professional_id: int,
    existing: Iterable[ScheduleBlock],
    exclude_block_id: Optional[int] = None,
) -> bool:
    """Check whether the candidate overlaps any block of the same professional."""
    return bool(find_conflicts(candidate, professional_id, existing, exclude_block_id))
