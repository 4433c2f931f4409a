"""
In-memory agenda store.

Holds professionals, requesters, activity types and schedule blocks in plain
collections owned by the instance. Every read returns copies so callers never
mutate stored records behind the store's back.
"""

import logging
import threading
from contextlib import contextmanager
from dataclasses import asdict, replace
from typing import Any, Dict, List, Optional

from pendulum import Date

from ..domain.exceptions import (
    BlockNotFoundError,
    ProfessionalNotFoundError,
    RequesterNotFoundError,
)
from ..domain.models import ActivityType, Professional, Requester, ScheduleBlock

logger = logging.getLogger(__name__)


class InMemoryStore:
    """
    Store implementing both the block and the catalog store protocols.

    Ids are assigned from per-collection counters starting at 1.
    Mutations and reads are serialized by one reentrant lock. A mutation whose
    persistence hook fails is rolled back before the error propagates.
    """

    def __init__(self):
        self._professionals: Dict[int, Professional] = {}
        self._requesters: Dict[int, Requester] = {}
        self._activity_types: Dict[int, ActivityType] = {}
        self._blocks: Dict[int, ScheduleBlock] = {}
        self._next_ids: Dict[str, int] = {
            "professionals": 1,
            "requesters": 1,
            "activity_types": 1,
            "blocks": 1,
        }
        self._lock = threading.RLock()

    def _allocate_id(self, collection: str) -> int:
        new_id = self._next_ids[collection]
        self._next_ids[collection] = new_id + 1
        return new_id

    def _changed(self) -> None:
        """Called after every mutation. Persistent subclasses write here."""

    @contextmanager
    def _mutation(self):
        with self._lock:
            snapshot = self._snapshot()
            try:
                yield
                self._changed()
            except Exception:
                self._restore(snapshot)
                raise

    def _snapshot(self) -> Dict[str, Dict]:
        # Records are replaced, never mutated in place, so shallow copies suffice
        return {
            "professionals": dict(self._professionals),
            "requesters": dict(self._requesters),
            "activity_types": dict(self._activity_types),
            "blocks": dict(self._blocks),
            "next_ids": dict(self._next_ids),
        }

    def _restore(self, snapshot: Dict[str, Dict]) -> None:
        self._professionals = snapshot["professionals"]
        self._requesters = snapshot["requesters"]
        self._activity_types = snapshot["activity_types"]
        self._blocks = snapshot["blocks"]
        self._next_ids = snapshot["next_ids"]

    # ─── Blocks ──────────────────────────────────────────────────────────────

    def list_blocks(self, date: Date) -> List[ScheduleBlock]:
        """Return the blocks scheduled on a date ordered by start time."""
        with self._lock:
            blocks = [replace(b) for b in self._blocks.values() if b.date == date]
        return sorted(blocks, key=lambda b: (b.start_time, b.id))

    def list_blocks_between(
        self,
        start: Date,
        end: Date,
        professional_id: Optional[int] = None,
    ) -> List[ScheduleBlock]:
        """Return blocks within [start, end] ordered by date and start time."""
        with self._lock:
            blocks = [
                replace(b)
                for b in self._blocks.values()
                if start <= b.date <= end
                and (professional_id is None or b.professional_id == professional_id)
            ]
        return sorted(blocks, key=lambda b: (b.date, b.start_time, b.id))

    def get_block(self, block_id: int) -> Optional[ScheduleBlock]:
        with self._lock:
            block = self._blocks.get(block_id)
            return replace(block) if block else None

    def insert_block(self, values: Dict[str, Any]) -> ScheduleBlock:
        """Store a new block and return it with its assigned id."""
        values = {key: value for key, value in values.items() if key != "id"}
        with self._mutation():
            block = ScheduleBlock(id=self._allocate_id("blocks"), **values)
            self._blocks[block.id] = block
        logger.debug("Inserted block %s", block.id)
        return replace(block)

    def merge_block(self, block_id: int, values: Dict[str, Any]) -> ScheduleBlock:
        """Overwrite only the given fields of a block."""
        with self._mutation():
            block = self._blocks.get(block_id)
            if block is None:
                raise BlockNotFoundError(f"Block {block_id} not found")

            merged = replace(block, **{k: v for k, v in values.items() if k != "id"})
            self._blocks[block_id] = merged
        return replace(merged)

    def remove_block(self, block_id: int) -> bool:
        """Delete a block. Returns False if it did not exist."""
        with self._lock:
            if block_id not in self._blocks:
                return False
            with self._mutation():
                del self._blocks[block_id]
        return True

    # ─── Professionals ───────────────────────────────────────────────────────

    def list_professionals(self, include_inactive: bool = False) -> List[Professional]:
        with self._lock:
            professionals = [
                replace(p)
                for p in self._professionals.values()
                if include_inactive or p.active
            ]
        return sorted(professionals, key=lambda p: (p.column_order, p.id))

    def get_professional(self, professional_id: int) -> Optional[Professional]:
        with self._lock:
            professional = self._professionals.get(professional_id)
            return replace(professional) if professional else None

    def add_professional(self, values: Dict[str, Any]) -> Professional:
        with self._mutation():
            professional = Professional(id=self._allocate_id("professionals"), **values)
            self._professionals[professional.id] = professional
        return replace(professional)

    def merge_professional(self, professional_id: int, values: Dict[str, Any]) -> Professional:
        with self._mutation():
            professional = self._professionals.get(professional_id)
            if professional is None:
                raise ProfessionalNotFoundError(f"Professional {professional_id} not found")

            merged = replace(professional, **values)
            self._professionals[professional_id] = merged
        return replace(merged)

    # ─── Requesters ──────────────────────────────────────────────────────────

    def list_requesters(self, include_inactive: bool = False) -> List[Requester]:
        with self._lock:
            requesters = [
                replace(r)
                for r in self._requesters.values()
                if include_inactive or r.active
            ]
        return sorted(requesters, key=lambda r: r.name.lower())

    def add_requester(self, name: str) -> Requester:
        with self._mutation():
            requester = Requester(id=self._allocate_id("requesters"), name=name)
            self._requesters[requester.id] = requester
        return replace(requester)

    def deactivate_requester(self, requester_id: int) -> Requester:
        with self._mutation():
            requester = self._requesters.get(requester_id)
            if requester is None:
                raise RequesterNotFoundError(f"Requester {requester_id} not found")

            requester = replace(requester, active=False)
            self._requesters[requester_id] = requester
        return replace(requester)

    # ─── Activity types ──────────────────────────────────────────────────────

    def list_activity_types(self) -> List[ActivityType]:
        with self._lock:
            activity_types = [replace(t) for t in self._activity_types.values()]
        return sorted(activity_types, key=lambda t: t.name.lower())

    def add_activity_type(self, name: str, color: str) -> ActivityType:
        with self._mutation():
            activity_type = ActivityType(id=self._allocate_id("activity_types"), name=name, color=color)
            self._activity_types[activity_type.id] = activity_type
        return replace(activity_type)

    def is_empty(self) -> bool:
        """True when no catalog data has been stored yet."""
        with self._lock:
            return not (self._professionals or self._requesters or self._activity_types)

    # ─── Serialization ───────────────────────────────────────────────────────

    def to_document(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "next_ids": dict(self._next_ids),
                "professionals": [asdict(p) for p in self._professionals.values()],
                "requesters": [asdict(r) for r in self._requesters.values()],
                "activity_types": [asdict(t) for t in self._activity_types.values()],
                "blocks": [b.to_dict() for b in self._blocks.values()],
            }

    def load_document(self, document: Dict[str, Any]) -> None:
        """Replace the store contents with a serialized document."""
        with self._lock:
            self._professionals = {
                item["id"]: Professional(**item) for item in document.get("professionals", [])
            }
            self._requesters = {
                item["id"]: Requester(**item) for item in document.get("requesters", [])
            }
            self._activity_types = {
                item["id"]: ActivityType(**item) for item in document.get("activity_types", [])
            }
            self._blocks = {
                item["id"]: ScheduleBlock.from_dict(item) for item in document.get("blocks", [])
            }

            next_ids = document.get("next_ids", {})
            collections = {
                "professionals": self._professionals,
                "requesters": self._requesters,
                "activity_types": self._activity_types,
                "blocks": self._blocks,
            }
            for name, items in collections.items():
                # Never hand out an id that is already taken
                self._next_ids[name] = max(next_ids.get(name, 1), max(items, default=0) + 1)
