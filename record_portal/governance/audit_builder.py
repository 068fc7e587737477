"""Builds immutable audit entries from a record and a proposed update set. No FastAPI."""

import uuid
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from record_portal.domain.models.record import (
    TRACKED_FIELDS,
    AgentIdentity,
    AuditEntry,
    CitizenRecord,
    FieldChange,
)
from record_portal.governance.exceptions import NoChangesError


def diff_fields(
    previous: CitizenRecord, updates: Mapping[str, Optional[str]]
) -> Dict[str, FieldChange]:
    """Old/new pairs for tracked fields whose proposed value differs from the current one."""
    changes: Dict[str, FieldChange] = {}
    for field_name in TRACKED_FIELDS:
        if field_name not in updates:
            continue
        old = previous.field_value(field_name)
        new = updates[field_name]
        if old != new:
            changes[field_name] = FieldChange(old=old, new=new)
    return changes


def has_changes(
    previous: CitizenRecord, updates: Mapping[str, Optional[str]], notes: str = ""
) -> bool:
    """Submission gate: some field differs, or the agent wrote justification notes."""
    return bool(diff_fields(previous, updates)) or bool(notes.strip())


def build_audit_entry(
    previous: CitizenRecord,
    updates: Mapping[str, Optional[str]],
    notes: str,
    agent: AgentIdentity,
    *,
    now: Optional[datetime] = None,
    entry_id: Optional[str] = None,
) -> AuditEntry:
    """
    Create the audit entry for one edit. Only changed fields are recorded.
    Raises NoChangesError when nothing changed and the notes are blank.
    """
    changes = diff_fields(previous, updates)
    if not changes and not notes.strip():
        raise NoChangesError(f"No changes to record {previous.id}")
    return AuditEntry(
        id=entry_id or f"hist-{uuid.uuid4().hex}",
        record_id=previous.id,
        changes=MappingProxyType(changes),
        notes=notes.strip(),
        timestamp=now or datetime.now(timezone.utc),
        agent_id=agent.agent_id,
        agent_name=agent.agent_name,
    )
