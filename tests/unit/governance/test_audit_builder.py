"""Governance tests: audit entries record only changed fields and are immutable."""

from dataclasses import FrozenInstanceError
from datetime import timezone

import pytest

from record_portal.domain.models.record import AuditEntry
from record_portal.governance.audit_builder import build_audit_entry, diff_fields, has_changes
from record_portal.governance.exceptions import NoChangesError


def test_unchanged_fields_are_omitted_from_diff(agent, make_record):
    record = make_record(phone_number="+2348031234567", local_government_area="Rabah")
    entry = build_audit_entry(
        record,
        {"phone_number": "+2348031234567", "local_government_area": "Wamakko"},
        "Relocated",
        agent,
    )
    assert set(entry.changes) == {"local_government_area"}
    assert entry.old_lga == "Rabah"
    assert entry.new_lga == "Wamakko"
    assert entry.old_phone is None
    assert entry.new_phone is None


def test_entry_carries_agent_notes_and_utc_timestamp(agent, make_record):
    record = make_record()
    entry = build_audit_entry(record, {"phone_number": "+2348099999999"}, "  Correction  ", agent)
    assert entry.record_id == record.id
    assert entry.notes == "Correction"
    assert entry.agent_id == "AGT-7742"
    assert entry.agent_name == "Jabir"
    assert entry.timestamp.tzinfo == timezone.utc
    assert entry.id.startswith("hist-")


def test_explicit_id_and_time_are_used(agent, make_record, fixed_now):
    entry = build_audit_entry(
        make_record(), {"name": "Danjuma Musa Bello"}, "", agent, now=fixed_now, entry_id="hist-1"
    )
    assert entry.id == "hist-1"
    assert entry.timestamp == fixed_now
    assert entry.change_for("name").old == "Danjuma Musa"


def test_no_change_and_blank_notes_is_rejected(agent, make_record):
    record = make_record()
    with pytest.raises(NoChangesError):
        build_audit_entry(record, {"phone_number": record.phone_number}, "   ", agent)


def test_notes_alone_produce_an_entry_without_field_pairs(agent, make_record):
    entry = build_audit_entry(make_record(), {}, "Verified in person", agent)
    assert dict(entry.changes) == {}
    assert entry.notes == "Verified in person"


def test_has_changes_gate(make_record):
    record = make_record()
    assert not has_changes(record, {"phone_number": record.phone_number}, "")
    assert has_changes(record, {"phone_number": "+2348099999999"}, "")
    assert has_changes(record, {}, "reason")


def test_diff_covers_optional_fields(make_record):
    record = make_record(address=None)
    changes = diff_fields(record, {"address": "12 Sultan Road", "photo": None})
    assert set(changes) == {"address"}
    assert changes["address"].old is None


def test_audit_entry_is_immutable(agent, make_record):
    entry = build_audit_entry(make_record(), {"nin": "98765432109"}, "", agent)
    assert isinstance(entry, AuditEntry)
    with pytest.raises(FrozenInstanceError):
        entry.notes = "edited"  # type: ignore[misc]
    with pytest.raises(TypeError):
        entry.changes["name"] = None  # type: ignore[index]


def test_to_dict_is_json_ready(agent, make_record):
    entry = build_audit_entry(make_record(), {"nin": "98765432109"}, "typo", agent)
    d = entry.to_dict()
    assert d["changes"] == {"nin": {"old": "12345678901", "new": "98765432109"}}
    assert d["timestamp"] == entry.timestamp.isoformat()
