"""Record creation and modification. The only code paths that produce new record versions."""

import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Mapping, Optional, Sequence, Tuple

from record_portal.domain.exceptions import (
    AuditMismatchError,
    DuplicateRecordError,
    RecordNotFoundError,
)
from record_portal.domain.models.record import (
    AuditEntry,
    CitizenRecord,
    FieldChange,
    RecordDraft,
    RecordStatus,
)
from record_portal.domain.validators.record_validator import validate_new_record, validate_updates

Records = Tuple[CitizenRecord, ...]


def find_record(records: Sequence[CitizenRecord], record_id: str) -> CitizenRecord:
    """Return the record with record_id. Raises RecordNotFoundError if absent."""
    for record in records:
        if record.id == record_id:
            return record
    raise RecordNotFoundError(f"Record not found: {record_id}")


def apply_modification(
    records: Sequence[CitizenRecord],
    record_id: str,
    updates: Mapping[str, Optional[str]],
    entry: AuditEntry,
    *,
    now: Optional[datetime] = None,
) -> Records:
    """
    Return a new collection where record_id is replaced by its next version:
    updated fields applied, status MODIFIED, last_modified refreshed, entry prepended
    to the history. The input collection is left untouched.
    """
    if entry.record_id != record_id:
        raise AuditMismatchError(
            f"Audit entry {entry.id} belongs to record {entry.record_id}, not {record_id}"
        )
    validate_updates(updates)
    current = find_record(records, record_id)
    for name, new in updates.items():
        old = current.field_value(name)
        if old != new and entry.changes.get(name) != FieldChange(old=old, new=new):
            raise AuditMismatchError(
                f"Audit entry {entry.id} does not record the change to {name} on {record_id}"
            )
    updated = replace(
        current,
        **dict(updates),
        status=RecordStatus.MODIFIED,
        last_modified=now or datetime.now(timezone.utc),
        modification_history=(entry, *current.modification_history),
    )
    return tuple(updated if record.id == record_id else record for record in records)


def create_record(
    records: Sequence[CitizenRecord],
    draft: RecordDraft,
    *,
    now: Optional[datetime] = None,
    record_id: Optional[str] = None,
) -> Tuple[CitizenRecord, Records]:
    """
    Validate a draft and insert it at the front of the collection as a PENDING record
    with an empty history. Returns (new_record, new_collection).
    """
    validate_new_record(draft)
    new_id = record_id or f"new-{uuid.uuid4().hex}"
    if any(record.id == new_id for record in records):
        raise DuplicateRecordError(f"Record id already exists: {new_id}")
    record = CitizenRecord(
        id=new_id,
        name=draft.name.strip(),
        nin=draft.nin,
        phone_number=draft.phone_number,
        gender=draft.gender,
        state_of_origin=draft.state_of_origin,
        local_government_area=draft.local_government_area,
        address=draft.address,
        date_of_birth=draft.date_of_birth,
        photo=draft.photo,
        status=RecordStatus.PENDING,
        last_modified=now or datetime.now(timezone.utc),
        modification_history=(),
    )
    return record, (record, *records)
