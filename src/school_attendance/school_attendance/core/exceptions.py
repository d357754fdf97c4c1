class DomainError(Exception):
    """Base exception for business rule violations."""

    retryable = False


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class DayOffError(ValidationError):
    """Raised when attendance is written on a weekend or holiday."""


class NotScheduledError(ValidationError):
    """Raised when a subject has no lesson for the chosen day and class."""


class NoActiveAcademicYearError(ValidationError):
    """Raised when attendance is saved while no academic year is active."""


class ImportFormatError(ValidationError):
    """Raised when no line of a pasted import matched the expected format."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class StoreWriteError(DomainError):
    """Raised when a write to the document store failed; nothing was applied."""

    retryable = True


class StoreNotConfiguredError(StoreWriteError):
    """Raised on writes while no document store is configured."""

    retryable = False


class StoreReadError(DomainError):
    """Raised when the document store could not be read."""

    retryable = True
