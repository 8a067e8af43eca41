"""
Domain Errors

Every failure the rental domain reports is one of four kinds:
- NotFoundError: an identifier does not resolve
- ConflictError: the request is well formed but clashes with current state
- DomainValidationError: the request itself is malformed
- Unauthorized: never raised here, it comes from the authentication layer

All of them are recoverable; the API layer turns them into 4xx responses.
"""


class DomainError(Exception):
    """Base class for errors raised by the domain layer."""

    code = 'domain_error'

    def __init__(self, message: str = ''):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message or self.__class__.__name__


class NotFoundError(DomainError):
    code = 'not_found'


class ConflictError(DomainError):
    code = 'conflict'


class DomainValidationError(DomainError, ValueError):
    code = 'validation_error'


class BookingConflictError(ConflictError):
    """Requested stay does not fit the property's availability."""

    code = 'booking_conflict'


class DuplicateReviewError(ConflictError):
    code = 'duplicate_review'


class InvalidStatusTransitionError(ConflictError):
    code = 'invalid_status_transition'
