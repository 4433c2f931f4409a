"""
Management of professionals, requesters and activity types.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol

from ..adapters.seed_data import seed_store
from ..domain.exceptions import CatalogValidationError, ProfessionalNotFoundError
from ..domain.models import ActivityType, Professional, Requester

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 128
MIN_COLUMN_ORDER = 1
MAX_COLUMN_ORDER = 20


class CatalogStoreProtocol(Protocol):
    """Protocol describing the catalog persistence the service needs."""

    def list_professionals(self, include_inactive: bool = False) -> List[Professional]: ...

    def get_professional(self, professional_id: int) -> Optional[Professional]: ...

    def add_professional(self, values: Dict[str, Any]) -> Professional: ...

    def merge_professional(self, professional_id: int, values: Dict[str, Any]) -> Professional: ...

    def list_requesters(self, include_inactive: bool = False) -> List[Requester]: ...

    def add_requester(self, name: str) -> Requester: ...

    def deactivate_requester(self, requester_id: int) -> Requester: ...

    def list_activity_types(self) -> List[ActivityType]: ...

    def add_activity_type(self, name: str, color: str) -> ActivityType: ...

    def is_empty(self) -> bool: ...


def _validate_name(name: str, entity: str) -> str:
    name = (name or "").strip()
    if not 1 <= len(name) <= MAX_NAME_LENGTH:
        raise CatalogValidationError(
            f"{entity} name must be between 1 and {MAX_NAME_LENGTH} characters"
        )
    return name


def _validate_column_order(value: int) -> int:
    if not MIN_COLUMN_ORDER <= value <= MAX_COLUMN_ORDER:
        raise CatalogValidationError(
            f"Column order must be between {MIN_COLUMN_ORDER} and {MAX_COLUMN_ORDER}, got {value}"
        )
    return value


class CatalogService:
    """CRUD for the entities blocks refer to. Deletions are soft."""

    def __init__(self, store: CatalogStoreProtocol) -> None:
        self._store = store

    def ensure_seeded(self) -> bool:
        """Load the default catalog if the store has none."""
        seeded = seed_store(self._store)
        if seeded:
            logger.info("Seeded empty store with the default catalog")
        return seeded

    # Professionals

    def list_professionals(self) -> List[Professional]:
        return self._store.list_professionals()

    def create_professional(
        self,
        name: str,
        column_order: int,
        color: Optional[str] = None,
    ) -> Professional:
        values: Dict[str, Any] = {
            "name": _validate_name(name, "Professional"),
            "column_order": _validate_column_order(column_order),
            "active": True,
        }
        if color:
            values["color"] = color

        professional = self._store.add_professional(values)
        logger.info("Created professional %s (%s)", professional.id, professional.name)
        return professional

    def update_professional(
        self,
        professional_id: int,
        name: Optional[str] = None,
        column_order: Optional[int] = None,
        color: Optional[str] = None,
    ) -> Professional:
        values: Dict[str, Any] = {}
        if name is not None:
            values["name"] = _validate_name(name, "Professional")
        if column_order is not None:
            values["column_order"] = _validate_column_order(column_order)
        if color is not None:
            values["color"] = color

        return self._store.merge_professional(professional_id, values)

    def delete_professional(self, professional_id: int) -> Professional:
        if self._store.get_professional(professional_id) is None:
            raise ProfessionalNotFoundError(f"Professional {professional_id} not found")

        professional = self._store.merge_professional(professional_id, {"active": False})
        logger.info("Deactivated professional %s", professional_id)
        return professional

    # Requesters

    def list_requesters(self) -> List[Requester]:
        return self._store.list_requesters()

    def create_requester(self, name: str) -> Requester:
        name = _validate_name(name, "Requester")
        existing = {r.name.lower() for r in self._store.list_requesters(include_inactive=True)}
        if name.lower() in existing:
            raise CatalogValidationError(f"Requester {name!r} already exists")

        requester = self._store.add_requester(name)
        logger.info("Created requester %s (%s)", requester.id, requester.name)
        return requester

    def delete_requester(self, requester_id: int) -> Requester:
        requester = self._store.deactivate_requester(requester_id)
        logger.info("Deactivated requester %s", requester_id)
        return requester

    # Activity types

    def list_activity_types(self) -> List[ActivityType]:
        return self._store.list_activity_types()
