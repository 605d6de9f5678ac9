class DomainError(Exception):
    """Base exception for business rule violations.

    Every subclass is local and recoverable: controllers turn it into a
    ``{"kind", "message"}`` payload with ``http_status``.
    """

    http_status = 400

    @property
    def kind(self) -> str:
        return type(self).__name__


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a scanned code or a record id resolves to nothing."""

    http_status = 404


class InactiveActorError(DomainError):
    """Raised when a known actor is deactivated."""

    http_status = 403


class AlreadyScannedError(DomainError):
    """Repeat scan of the same day. Non-fatal, the existing record stands."""

    http_status = 200


class DuplicateScanError(DomainError):
    """Raised when a meal is scanned twice for the same learner, day and type."""

    http_status = 409


class InvalidStateError(DomainError):
    """Raised when a justification transition starts from a disallowed status."""

    http_status = 409


class AuthorizationError(DomainError):
    """Raised when an identity lacks permission for an action."""

    http_status = 403
