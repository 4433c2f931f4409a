"""
Domain-specific exception hierarchy for the agenda board.

Each error carries a ``code`` naming the condition an outer transport layer
should report (bad request, conflict, not found, internal).
"""


class AgendaError(Exception):
    """Base class for all application-level errors."""

    code = "INTERNAL"


class InvalidTimeError(AgendaError, ValueError):
    """Raised when a time-of-day or date string is malformed."""

    code = "BAD_REQUEST"


class InvalidIntervalError(AgendaError, ValueError):
    """Raised when an interval does not end after it starts."""

    code = "BAD_REQUEST"


class BlockConflictError(AgendaError):
    """Raised when a block overlaps an existing block of the same professional."""

    code = "CONFLICT"

    def __init__(self, message: str, conflicts=None):
        super().__init__(message)
        self.conflicts = list(conflicts or [])


class NotFoundError(AgendaError):
    """Raised when an entity id is unknown to the store."""

    code = "NOT_FOUND"


class BlockNotFoundError(NotFoundError):
    pass


class ProfessionalNotFoundError(NotFoundError):
    pass


class RequesterNotFoundError(NotFoundError):
    pass


class CatalogValidationError(AgendaError, ValueError):
    """Raised when a professional or requester field is out of range."""

    code = "BAD_REQUEST"


class ReportRequestError(AgendaError, ValueError):
    """Raised when a report is requested for an unsupported period."""

    code = "BAD_REQUEST"


class StoreError(AgendaError):
    """Raised when persisted agenda data cannot be read or written."""


class ConfigError(AgendaError, ValueError):
    """Raised when the configuration file is missing required structure."""
