"""RecordService tests: gate, sync outcome, audit commit and metrics."""

import logging

import pytest

from record_portal.application.exceptions import SyncFailureError
from record_portal.application.record_service import RecordService
from record_portal.application.record_store import RecordStore
from record_portal.domain.exceptions import DomainValidationError, RecordNotFoundError
from record_portal.domain.models.record import RecordDraft, RecordStatus
from record_portal.governance.exceptions import NoChangesError
from record_portal.infrastructure.sync.simulated_sync import SimulatedSync


async def test_create_then_modify_keeps_full_history(record_service, agent, metrics):
    created = await record_service.create_record(
        RecordDraft(name="Musa Garba", nin="12345678901", phone_number="+2348012345678")
    )
    assert created.status == RecordStatus.PENDING
    assert record_service.first_record() == created

    updated = await record_service.submit_modification(
        created.id, {"phone_number": "+2348099999999"}, "Correction", agent
    )
    assert updated.status == RecordStatus.MODIFIED
    assert updated.phone_number == "+2348099999999"
    assert len(updated.modification_history) == 1
    entry = updated.modification_history[0]
    assert entry.old_phone == "+2348012345678"
    assert entry.new_phone == "+2348099999999"
    assert entry.notes == "Correction"
    assert entry.agent_id == agent.agent_id

    assert metrics.get_counter("records_created") == 1
    assert metrics.get_counter("records_modified") == 1


async def test_only_changed_fields_reach_the_record(record_service, agent):
    target = record_service.first_record()
    updated = await record_service.submit_modification(
        target.id,
        {"phone_number": target.phone_number, "local_government_area": "Wamakko"},
        "",
        agent,
    )
    assert set(updated.modification_history[0].changes) == {"local_government_area"}
    assert updated.phone_number == target.phone_number


async def test_sync_failure_leaves_record_unchanged(store, never_sync, metrics, agent):
    service = RecordService(store=store, sync=never_sync, metrics=metrics)
    target = store.records()[0]
    version = store.state.version

    with pytest.raises(SyncFailureError):
        await service.submit_modification(target.id, {"name": "Changed Name"}, "", agent)

    assert store.get(target.id) == target
    assert store.state.version == version
    assert metrics.get_counter("sync_failures") == 1
    assert metrics.get_counter("records_modified") == 0


def test_no_op_edit_is_rejected_before_sync(store, metrics):
    sync = SimulatedSync(delay_seconds=0.0, success_rate=1.0)
    calls = []
    sync.attempt = lambda: calls.append(1) or True  # type: ignore[method-assign]
    service = RecordService(store=store, sync=sync, metrics=metrics)
    target = store.records()[0]

    with pytest.raises(NoChangesError):
        service.check_modification(target.id, {"phone_number": target.phone_number}, "  ")
    assert calls == []


async def test_no_op_submission_never_schedules(store, metrics, agent):
    sync = SimulatedSync(delay_seconds=0.0, success_rate=1.0)
    calls = []
    sync.attempt = lambda: calls.append(1) or True  # type: ignore[method-assign]
    service = RecordService(store=store, sync=sync, metrics=metrics)
    target = store.records()[0]

    with pytest.raises(NoChangesError):
        await service.submit_modification(target.id, {}, "", agent)
    assert calls == []


def test_invalid_phone_is_rejected(record_service):
    target = record_service.first_record()
    with pytest.raises(DomainValidationError) as exc:
        record_service.check_modification(target.id, {"phone_number": "08031234567"}, "")
    assert exc.value.fields == ("phone_number",)


def test_unknown_record_is_rejected(record_service):
    with pytest.raises(RecordNotFoundError):
        record_service.check_modification("missing", {"name": "Some Body"}, "")


async def test_invalid_draft_is_not_stored(record_service, store):
    before = store.records()
    with pytest.raises(DomainValidationError):
        await record_service.create_record(RecordDraft(name="Musa Garba", nin="123", phone_number="+2348012345678"))
    assert store.records() == before


def test_list_records_reports_total_and_matches(record_service, store):
    target = store.records()[5]
    total, matches = record_service.list_records(target.nin)
    assert total == len(store.records())
    assert target in matches
    total, everything = record_service.list_records("")
    assert everything == store.records()


async def test_scheduled_modification_can_be_cancelled(agent, metrics, seeded_records):
    store = RecordStore(seeded_records)
    service = RecordService(
        store=store, sync=SimulatedSync(delay_seconds=5.0, success_rate=1.0), metrics=metrics
    )
    target = store.records()[0]
    action = service.schedule_modification(target.id, {"name": "Another Name"}, "", agent)
    assert action.cancel() is True
    assert store.get(target.id) == target


async def test_modification_is_logged(record_service, agent, caplog):
    target = record_service.first_record()
    with caplog.at_level(logging.INFO, logger="record_portal.application.record_service"):
        await record_service.submit_modification(target.id, {"name": "Logged Change"}, "", agent)
    assert any(r.getMessage() == "record_modified" for r in caplog.records)
