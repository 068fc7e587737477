"""Pydantic schemas for the record API. Format rules live in the domain validators."""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from record_portal.domain.models.record import (
    AuditEntry,
    CitizenRecord,
    Gender,
    RecordDraft,
    RecordStatus,
)


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class RecordCreateRequest(BaseModel):
    """New-record form. Id, status, timestamp and history are assigned by the store."""

    name: str
    nin: str
    phone_number: str = "+234"
    gender: Gender = Gender.MALE
    state_of_origin: str = "Sokoto"
    local_government_area: str = "Rabah"
    address: Optional[str] = None
    date_of_birth: Optional[str] = Field(None, description="ISO date, YYYY-MM-DD")
    photo: Optional[str] = Field(None, description="data:image/...;base64,... URL")

    def to_draft(self) -> RecordDraft:
        return RecordDraft(
            name=self.name,
            nin=self.nin,
            phone_number=self.phone_number,
            gender=self.gender,
            state_of_origin=self.state_of_origin,
            local_government_area=self.local_government_area,
            address=self.address,
            date_of_birth=self.date_of_birth,
            photo=self.photo,
        )


class RecordModificationRequest(BaseModel):
    """Modification form. Only fields explicitly sent are treated as proposed updates."""

    phone_number: Optional[str] = None
    local_government_area: Optional[str] = None
    nin: Optional[str] = None
    name: Optional[str] = None
    address: Optional[str] = None
    date_of_birth: Optional[str] = None
    photo: Optional[str] = None
    notes: str = ""

    model_config = {"extra": "forbid"}

    def updates(self) -> Dict[str, Optional[str]]:
        sent = self.model_dump(exclude_unset=True)
        sent.pop("notes", None)
        return sent


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class FieldChangeResponse(BaseModel):
    old: Optional[str] = None
    new: Optional[str] = None


class AuditEntryResponse(BaseModel):
    id: str
    record_id: str
    changes: Dict[str, FieldChangeResponse]
    notes: str
    timestamp: datetime
    agent_id: str
    agent_name: str

    @classmethod
    def from_domain(cls, entry: AuditEntry) -> "AuditEntryResponse":
        return cls(
            id=entry.id,
            record_id=entry.record_id,
            changes={
                name: FieldChangeResponse(old=change.old, new=change.new)
                for name, change in entry.changes.items()
            },
            notes=entry.notes,
            timestamp=entry.timestamp,
            agent_id=entry.agent_id,
            agent_name=entry.agent_name,
        )


class RecordResponse(BaseModel):
    id: str
    name: str
    nin: str
    phone_number: str
    gender: Gender
    state_of_origin: str
    local_government_area: str
    address: Optional[str] = None
    date_of_birth: Optional[str] = None
    photo: Optional[str] = None
    status: RecordStatus
    last_modified: datetime
    modification_history: List[AuditEntryResponse] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, record: CitizenRecord) -> "RecordResponse":
        return cls(
            id=record.id,
            name=record.name,
            nin=record.nin,
            phone_number=record.phone_number,
            gender=record.gender,
            state_of_origin=record.state_of_origin,
            local_government_area=record.local_government_area,
            address=record.address,
            date_of_birth=record.date_of_birth,
            photo=record.photo,
            status=record.status,
            last_modified=record.last_modified,
            modification_history=[
                AuditEntryResponse.from_domain(entry) for entry in record.modification_history
            ],
        )


class RecordListResponse(BaseModel):
    total: int
    showing: int
    records: List[RecordResponse]
