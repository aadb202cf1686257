"""
Error taxonomy for the bot ledger service.

Service errors carry the HTTP status they map to, so route handlers and the
application-level exception handler never need to inspect message text.
Document errors are raised by the persistence adapter and wrapped by the
layers above it.
"""

from typing import Any, Dict, Optional


class ServiceError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class ValidationError(ServiceError):
    """A business rule rejected the request. Never mutates state."""

    status_code = 400


class PersistenceError(ServiceError):
    """A document write failed after in-memory state was changed."""

    status_code = 500

    def __init__(
        self,
        message: str,
        code: str,
        details: Optional[Dict[str, Any]] = None,
        compensation_error: Optional[Exception] = None,
    ):
        super().__init__(message, code, details)
        self.compensation_error = compensation_error


class NotFoundError(ServiceError):
    """The requested record does not exist."""

    status_code = 404


class StartupError(Exception):
    """State could not be initialised; the service must not serve requests."""


class DocumentError(Exception):
    """Base class for persistence adapter failures."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{reason}: {path}")
        self.path = path
        self.reason = reason


class DocumentNotFoundError(DocumentError):
    """The document does not exist on disk."""


class DocumentReadError(DocumentError):
    """The document exists but could not be read."""


class DocumentWriteError(DocumentError):
    """The document could not be written."""
