class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a session, student, batch or account id is unknown."""


class InvalidTransitionError(DomainError):
    """Raised when a session cannot move to the requested status."""


class SessionLockedError(DomainError):
    """Raised when attendance is written to a LOCKED session."""


class EditWindowExpiredError(DomainError):
    """Raised when a FINALIZED session is edited after its calendar day."""
