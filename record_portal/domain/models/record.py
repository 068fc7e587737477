"""Domain model for citizen records and their audit trail. Pure business semantics."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Mapping, Optional, Tuple

# Fields an agent may change through the modification workflow, in diff order.
TRACKED_FIELDS: Tuple[str, ...] = (
    "phone_number",
    "local_government_area",
    "nin",
    "name",
    "address",
    "date_of_birth",
    "photo",
)


class RecordStatus(str, Enum):
    """Verification status of a citizen record."""

    VERIFIED = "Verified"
    PENDING = "Pending"
    FLAGGED = "Flagged"
    MODIFIED = "Modified"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"


@dataclass(frozen=True)
class FieldChange:
    """Old/new value pair for a single changed field."""

    old: Optional[str]
    new: Optional[str]


@dataclass(frozen=True)
class AgentIdentity:
    """The agent acting on a record (who)."""

    agent_id: str
    agent_name: str


@dataclass(frozen=True)
class AuditEntry:
    """
    Immutable history entry for one edit: what changed (old/new per field), why (notes),
    when (UTC) and who (agent). Only fields that actually changed appear in `changes`.
    """

    id: str
    record_id: str
    changes: Mapping[str, FieldChange]
    notes: str
    timestamp: datetime
    agent_id: str
    agent_name: str

    def change_for(self, field_name: str) -> Optional[FieldChange]:
        return self.changes.get(field_name)

    def _old(self, field_name: str) -> Optional[str]:
        change = self.changes.get(field_name)
        return change.old if change else None

    def _new(self, field_name: str) -> Optional[str]:
        change = self.changes.get(field_name)
        return change.new if change else None

    # Narrow phone/LGA accessors kept for callers of the older entry shape.
    @property
    def old_phone(self) -> Optional[str]:
        return self._old("phone_number")

    @property
    def new_phone(self) -> Optional[str]:
        return self._new("phone_number")

    @property
    def old_lga(self) -> Optional[str]:
        return self._old("local_government_area")

    @property
    def new_lga(self) -> Optional[str]:
        return self._new("local_government_area")

    def to_dict(self) -> dict:
        """Structured representation for JSON logging."""
        return {
            "id": self.id,
            "record_id": self.record_id,
            "changes": {
                name: {"old": change.old, "new": change.new}
                for name, change in self.changes.items()
            },
            "notes": self.notes,
            "timestamp": self.timestamp.isoformat(),
            "agent_id": self.agent_id,
            "agent_name": self.agent_name,
        }


@dataclass(frozen=True)
class RecordDraft:
    """Candidate record submitted through the new-record form (no id/status/history yet)."""

    name: str
    nin: str
    phone_number: str
    gender: Gender = Gender.MALE
    state_of_origin: str = "Sokoto"
    local_government_area: str = "Rabah"
    address: Optional[str] = None
    date_of_birth: Optional[str] = None
    photo: Optional[str] = None


@dataclass(frozen=True)
class CitizenRecord:
    """
    One citizen's identity entry. Immutable: every change produces a new instance
    through the record mutator, which also prepends the matching AuditEntry.
    """

    id: str
    name: str
    nin: str
    phone_number: str
    gender: Gender
    state_of_origin: str
    local_government_area: str
    status: RecordStatus
    last_modified: datetime
    address: Optional[str] = None
    date_of_birth: Optional[str] = None
    photo: Optional[str] = None
    modification_history: Tuple[AuditEntry, ...] = field(default_factory=tuple)

    def field_value(self, field_name: str) -> Optional[str]:
        if field_name not in TRACKED_FIELDS:
            raise KeyError(field_name)
        return getattr(self, field_name)
