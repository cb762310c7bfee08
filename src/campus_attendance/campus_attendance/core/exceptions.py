class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidTransition(DomainError):
    """Raised when the capture flow is asked for a move it does not allow."""


class CaptureIncomplete(DomainError):
    """Raised when attendance is submitted without both photo and audio."""


class NotAuthenticated(DomainError):
    """Raised when an action needs an employee identity and none is present."""


class SessionExpired(DomainError):
    """Raised when the backend rejects the credential (HTTP 401/403).

    The caller is expected to sign out and send the user back to login.
    """


class TransientNetworkFailure(DomainError):
    """Raised on timeouts and connectivity errors. Safe to retry by hand."""


class SubmissionRejected(DomainError):
    """Raised when the backend answers an attendance submission with a failure."""


class LocationUnavailable(DomainError):
    """Raised when neither a live nor a last-known position could be obtained."""


class StorageError(DomainError):
    """Raised when durable local state cannot be read or written."""
