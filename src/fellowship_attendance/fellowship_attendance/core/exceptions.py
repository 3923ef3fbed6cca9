from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced session, cohort or attendance record does not exist."""

    def __init__(self, resource: str, identifier: object | None = None, message: str | None = None):
        self.resource = resource
        self.identifier = identifier
        if message is None:
            message = f"{resource} with ID {identifier} not found" if identifier is not None else f"{resource} not found"
        super().__init__(message)


class ConflictError(DomainError):
    """Raised on duplicate check-in/check-out (at most one record per user and session)."""


class ForbiddenError(DomainError):
    """Raised when the user may not act on the session (e.g. not in the cohort)."""


class RenderError(DomainError):
    """Raised when the QR renderer fails. The session itself was resolved."""


class StaleRecordError(ConflictError):
    """Raised when a record changed between read and write. Safe to retry."""
