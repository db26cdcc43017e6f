"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.

``DataIntegrityWarning`` is the odd one out: it is never raised.  Reports
collect instances of it for records they had to skip.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Input is malformed or violates an invariant."""


class PreconditionError(DomainException):
    """An operation was attempted before its preconditions were met."""


class BusinessRuleViolation(DomainException):
    """A well-formed request that the business rules do not allow."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class DataIntegrityWarning(UserWarning):
    """A stored record is unusable for reporting and was skipped."""

    def __init__(self, record_id: str | None, reason: str) -> None:
        super().__init__(f"{record_id or '<unknown>'}: {reason}")
        self.record_id = record_id
        self.reason = reason
