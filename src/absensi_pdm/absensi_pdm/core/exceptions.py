class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class InvalidCredentialsError(AuthenticationError):
    """No account matches the given username/password pair."""


class AlreadyRecordedError(ValidationError):
    """The participant already has an attendance record for that day."""


class MissingExcuseReasonError(ValidationError):
    """An excused (izin) submission arrived without a reason."""


class PeriodClosedError(AuthorizationError):
    """A non-admin tried to submit attendance for a closed month."""
