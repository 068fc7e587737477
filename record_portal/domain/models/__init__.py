"""Domain models. Pure business entities."""

from record_portal.domain.models.record import (
    TRACKED_FIELDS,
    AgentIdentity,
    AuditEntry,
    CitizenRecord,
    FieldChange,
    Gender,
    RecordDraft,
    RecordStatus,
)

__all__ = [
    "TRACKED_FIELDS",
    "AgentIdentity",
    "AuditEntry",
    "CitizenRecord",
    "FieldChange",
    "Gender",
    "RecordDraft",
    "RecordStatus",
]
