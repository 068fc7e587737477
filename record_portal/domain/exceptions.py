"""Domain-specific exceptions. Pure domain layer, no infrastructure."""

from typing import Sequence


class DomainError(Exception):
    """Base for all domain-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DomainValidationError(DomainError):
    """Raised when one or more record fields fail their format constraints."""

    def __init__(self, message: str, fields: Sequence[str] = ()) -> None:
        self.fields = tuple(fields)
        super().__init__(message)


class RecordNotFoundError(DomainError):
    """Raised when a mutation or lookup targets a record id absent from the store."""


class DuplicateRecordError(DomainError):
    """Raised when a new record would reuse an identifier already in the store."""


class AuditMismatchError(DomainError):
    """Raised when an audit entry is applied to a record it was not built for."""
