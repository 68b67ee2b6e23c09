"""
Domain Errors

Every failure raised by the booking, payment and review services is one of
the kinds below. Callers branch on the class (or on ``kind`` once the error
has been serialized) to tell "does not exist" apart from "exists but the
requested change is not allowed".
"""


class DomainError(Exception):
    """Base class for errors surfaced to the request layer."""

    kind = 'error'
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {'kind': self.kind, 'message': self.message}


class RequestValidationError(DomainError, ValueError):
    """Caller error: missing field, non-positive id, inverted dates."""

    kind = 'validation'


class NotFoundError(DomainError):
    """A referenced property, user, booking, payment or review is absent."""

    kind = 'not_found'
    status_code = 404


class BookingConflictError(DomainError):
    """Raised when a property is busy for requested dates."""

    kind = 'conflict'
    status_code = 409


class StateConflictError(DomainError):
    """A business rule forbids the change in the record's current state."""

    kind = 'state_conflict'


def require_positive_id(value, label: str) -> int:
    """Return ``value`` if it is a positive integer id."""
    if value is None or isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise RequestValidationError(f"{label} cannot be null or negative")
    return value
