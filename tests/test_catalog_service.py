"""
Tests for professionals, requesters and activity types.
"""

import pytest

from agendaboard.adapters.memory_store import InMemoryStore
from agendaboard.adapters.seed_data import (
    DEFAULT_ACTIVITY_TYPES,
    DEFAULT_PROFESSIONALS,
    DEFAULT_REQUESTERS,
)
from agendaboard.domain.exceptions import (
    CatalogValidationError,
    ProfessionalNotFoundError,
    RequesterNotFoundError,
)
from agendaboard.services.catalog import CatalogService


def _build_service(seeded: bool = False) -> CatalogService:
    service = CatalogService(InMemoryStore())
    if seeded:
        service.ensure_seeded()
    return service


class TestSeeding:
    """Tests for default catalog seeding."""

    def test_seed_empty_store(self):
        """An empty store receives the default catalog."""
        service = _build_service()

        assert service.ensure_seeded() is True
        assert len(service.list_professionals()) == len(DEFAULT_PROFESSIONALS)
        assert len(service.list_activity_types()) == len(DEFAULT_ACTIVITY_TYPES)
        assert len(service.list_requesters()) == len(DEFAULT_REQUESTERS)

    def test_seed_is_idempotent(self):
        """A store with data is never reseeded."""
        service = _build_service(seeded=True)

        assert service.ensure_seeded() is False
        assert len(service.list_professionals()) == len(DEFAULT_PROFESSIONALS)

    def test_seeded_professionals_follow_column_order(self):
        """Seeded professionals get consecutive board columns."""
        professionals = _build_service(seeded=True).list_professionals()

        assert [p.column_order for p in professionals] == list(range(1, len(DEFAULT_PROFESSIONALS) + 1))
        assert professionals[0].name == "Ana Silva"
        assert professionals[-1].group_label == "secundario"


class TestProfessionals:
    """Tests for professional management."""

    def test_create_and_list_in_column_order(self):
        """Professionals are listed by board column."""
        service = _build_service()
        service.create_professional("Second", column_order=2)
        service.create_professional("First", column_order=1, color="#000000")

        professionals = service.list_professionals()

        assert [p.name for p in professionals] == ["First", "Second"]
        assert professionals[0].color == "#000000"
        assert professionals[1].color == "#6366f1"

    @pytest.mark.parametrize("name, column_order", [("", 1), ("x" * 129, 1), ("Ok", 0), ("Ok", 21)])
    def test_create_rejects_out_of_range_fields(self, name, column_order):
        """Names and columns are range checked."""
        with pytest.raises(CatalogValidationError):
            _build_service().create_professional(name, column_order=column_order)

    def test_update_changes_only_given_fields(self):
        """Updates are merges."""
        service = _build_service()
        professional = service.create_professional("Ana", column_order=1, color="#111111")

        updated = service.update_professional(professional.id, column_order=5)

        assert updated.column_order == 5
        assert updated.name == "Ana"
        assert updated.color == "#111111"

    def test_delete_is_soft(self):
        """Deleted professionals disappear from the list but remain stored."""
        store = InMemoryStore()
        service = CatalogService(store)
        professional = service.create_professional("Ana", column_order=1)

        service.delete_professional(professional.id)

        assert service.list_professionals() == []
        assert store.get_professional(professional.id).active is False

    def test_unknown_professional(self):
        """Unknown ids are reported."""
        service = _build_service()

        with pytest.raises(ProfessionalNotFoundError):
            service.delete_professional(42)
        with pytest.raises(ProfessionalNotFoundError):
            service.update_professional(42, name="x")


class TestRequesters:
    """Tests for requester management."""

    def test_requesters_sorted_by_name(self):
        """Requesters are listed alphabetically."""
        service = _build_service()
        service.create_requester("Mirian")
        service.create_requester("allan")

        assert [r.name for r in service.list_requesters()] == ["allan", "Mirian"]

    def test_duplicate_requester_rejected(self):
        """Requester names are unique regardless of case."""
        service = _build_service()
        service.create_requester("Gabi")

        with pytest.raises(CatalogValidationError):
            service.create_requester("gabi")

    def test_delete_requester(self):
        """Deleted requesters are hidden."""
        service = _build_service()
        requester = service.create_requester("Phill")

        service.delete_requester(requester.id)

        assert service.list_requesters() == []
        with pytest.raises(RequesterNotFoundError):
            service.delete_requester(99)
