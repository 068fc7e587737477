"""Domain layer: models, schemas, validators, mutations, search. Pure business logic only."""

from record_portal.domain.exceptions import (
    AuditMismatchError,
    DomainError,
    DomainValidationError,
    DuplicateRecordError,
    RecordNotFoundError,
)
from record_portal.domain.models import (
    AgentIdentity,
    AuditEntry,
    CitizenRecord,
    FieldChange,
    Gender,
    RecordDraft,
    RecordStatus,
)
from record_portal.domain.mutations import apply_modification, create_record, find_record
from record_portal.domain.search import filter_records

__all__ = [
    "AgentIdentity",
    "AuditEntry",
    "AuditMismatchError",
    "CitizenRecord",
    "DomainError",
    "DomainValidationError",
    "DuplicateRecordError",
    "FieldChange",
    "Gender",
    "RecordDraft",
    "RecordNotFoundError",
    "RecordStatus",
    "apply_modification",
    "create_record",
    "filter_records",
    "find_record",
]
