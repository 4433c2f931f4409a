"""
Application services for creating, updating and deleting schedule blocks.

The service sequences interval validation, the overlap check and the duration
split before handing plain records to a store. The store is reached through a
protocol, so the in-memory store, the JSON file store or a test stub can be
plugged in.
"""

from __future__ import annotations

import logging
import threading
from contextlib import ExitStack
from typing import Any, Dict, List, Optional, Protocol, Tuple

from pendulum import Date

from ..domain.durations import split_interval, split_times
from ..domain.exceptions import BlockConflictError, BlockNotFoundError
from ..domain.models import (
    BlockDraft,
    BlockUpdate,
    DurationBreakdown,
    Interval,
    ScheduleBlock,
    format_date,
)
from ..domain.overlap import find_conflicts

logger = logging.getLogger(__name__)

LockKey = Tuple[int, Date]


class BlockStoreProtocol(Protocol):
    """Protocol describing the block listing and persistence the service needs."""

    def list_blocks(self, date: Date) -> List[ScheduleBlock]:
        """Return the blocks scheduled on a date."""

    def get_block(self, block_id: int) -> Optional[ScheduleBlock]:
        """Return a block by id, or None."""

    def insert_block(self, values: Dict[str, Any]) -> ScheduleBlock:
        """Store a new block and return it with an id."""

    def merge_block(self, block_id: int, values: Dict[str, Any]) -> ScheduleBlock:
        """Overwrite only the given fields of a block."""

    def remove_block(self, block_id: int) -> bool:
        """Delete a block, returning whether it existed."""


class _KeyedLocks:
    """Registry of one lock per (professional, date) key."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[LockKey, threading.Lock] = {}

    def _lock_for(self, key: LockKey) -> threading.Lock:
        with self._guard:
            return self._locks.setdefault(key, threading.Lock())

    def hold(self, *keys: LockKey) -> ExitStack:
        """Acquire the locks of all keys in a fixed order."""
        stack = ExitStack()
        for key in sorted(set(keys), key=lambda k: (k[0], k[1].isoformat())):
            stack.enter_context(self._lock_for(key))
        return stack


class BlockService:
    """
    Orchestrates block mutations against a store.

    Creation and update hold a lock per (professional, date) across the overlap
    check and the write, so two callers sharing this service can never both
    insert overlapping blocks.
    """

    def __init__(self, store: BlockStoreProtocol) -> None:
        self._store = store
        self._locks = _KeyedLocks()

    def list_blocks(self, date: Date) -> List[ScheduleBlock]:
        return self._store.list_blocks(date)

    def create_block(self, draft: BlockDraft, created_by: Optional[int] = None) -> ScheduleBlock:
        """
        Validate and store a new block.

        Raises:
            InvalidIntervalError: If the block does not end after it starts
            BlockConflictError: If it overlaps a block of the same professional
        """
        interval = Interval(start=draft.start_time, end=draft.end_time)

        with self._locks.hold((draft.professional_id, draft.date)):
            self._ensure_no_conflict(interval, draft.professional_id, draft.date)

            values = {
                "professional_id": draft.professional_id,
                "date": draft.date,
                "start_time": draft.start_time,
                "end_time": draft.end_time,
                "activity_type_id": draft.activity_type_id,
                "requester_id": draft.requester_id,
                "job_number": draft.job_number,
                "job_name": draft.job_name,
                "description": draft.description,
                "color": draft.color,
                "created_by": created_by,
            }
            values.update(split_interval(interval).as_block_fields())

            block = self._store.insert_block(values)

        logger.info(
            "Created block %s for professional %s on %s (%s)",
            block.id,
            block.professional_id,
            format_date(block.date),
            interval,
        )
        return block

    def update_block(self, block_id: int, update: BlockUpdate) -> ScheduleBlock:
        """
        Apply a partial update to a block.

        A supplied start or end time is merged with the stored counterpart, so
        the durations are recomputed for the resulting interval. The overlap
        check is repeated whenever the interval, date or professional changes.

        Raises:
            BlockNotFoundError: If the block does not exist
            InvalidIntervalError: If the merged interval does not end after it starts
            BlockConflictError: If the moved block overlaps another one
        """
        changes = update.supplied_fields()

        while True:
            seen = self._require_block(block_id)
            target_professional = changes.get("professional_id", seen.professional_id)
            target_date = changes.get("date", seen.date)

            with self._locks.hold(
                (seen.professional_id, seen.date),
                (target_professional, target_date),
            ):
                current = self._require_block(block_id)
                if (current.professional_id, current.date) != (seen.professional_id, seen.date):
                    # Moved by another caller before the locks were taken
                    continue

                interval = Interval(
                    start=changes.get("start_time", current.start_time),
                    end=changes.get("end_time", current.end_time),
                )

                moved = (
                    update.touches_interval
                    or target_professional != current.professional_id
                    or target_date != current.date
                )
                if moved:
                    self._ensure_no_conflict(
                        interval,
                        target_professional,
                        target_date,
                        exclude_block_id=block_id,
                    )

                if update.touches_interval:
                    changes.update(split_interval(interval).as_block_fields())

                block = self._store.merge_block(block_id, changes)
                break

        logger.info("Updated block %s (%s)", block_id, ", ".join(sorted(changes)) or "no changes")
        return block

    def delete_block(self, block_id: int) -> None:
        """
        Delete a block.

        Raises:
            BlockNotFoundError: If the block does not exist
        """
        if not self._store.remove_block(block_id):
            raise BlockNotFoundError(f"Block {block_id} not found")
        logger.info("Deleted block %s", block_id)

    @staticmethod
    def calc_durations(start_time: str, end_time: str) -> DurationBreakdown:
        """Duration breakdown for two ``HH:MM`` strings, without storing anything."""
        return split_times(start_time, end_time)

    def _require_block(self, block_id: int) -> ScheduleBlock:
        block = self._store.get_block(block_id)
        if block is None:
            raise BlockNotFoundError(f"Block {block_id} not found")
        return block

    def _ensure_no_conflict(
        self,
        interval: Interval,
        professional_id: int,
        date: Date,
        exclude_block_id: Optional[int] = None,
    ) -> None:
        existing = self._store.list_blocks(date)
        conflicts = find_conflicts(interval, professional_id, existing, exclude_block_id)
        if not conflicts:
            return

        logger.warning(
            "Rejected %s for professional %s on %s: overlaps block(s) %s",
            interval,
            professional_id,
            format_date(date),
            ", ".join(str(block.id) for block in conflicts),
        )
        raise BlockConflictError("Block overlaps with an existing block", conflicts=conflicts)
