"""Custom exceptions for the RentDesk application.

Every exception carries a stable ``kind`` string so callers (the HTTP layer,
scripts, tests) can branch on the failure class without string matching on
messages.
"""


class RentDeskError(Exception):
    """Base exception for RentDesk application."""

    kind = "internal"

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class ValidationError(RentDeskError):
    """Raised when input validation fails."""

    kind = "validation"


class NotFoundError(RentDeskError):
    """Raised when a referenced entity does not exist."""

    kind = "not_found"


class ConflictError(RentDeskError):
    """Raised when an operation would violate a workflow invariant."""

    kind = "conflict"


class AuthenticationError(RentDeskError):
    """Raised when authentication fails."""

    kind = "authentication"


class AuthorizationError(RentDeskError):
    """Raised when the caller's role or ownership does not permit an operation."""

    kind = "authorization"


class StoreTimeoutError(RentDeskError):
    """Raised when the backing store does not complete within the lock bound."""

    kind = "timeout"


class InternalError(RentDeskError):
    """Raised on unexpected storage failures."""

    kind = "internal"


class ConfigurationError(RentDeskError):
    """Raised when configuration is invalid."""

    kind = "configuration"
