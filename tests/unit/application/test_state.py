"""Reducer tests: pure store transitions and the single-modal workspace state machine."""

import pytest

from record_portal.application.exceptions import ModalStateError
from record_portal.application.state import (
    CLOSED,
    CreateOpened,
    Creating,
    EditOpened,
    Editing,
    ModalClosed,
    RecordCreated,
    RecordModified,
    RecordsLoaded,
    StoreState,
    SyncFailed,
    SyncStarted,
    SyncStatus,
    SyncSucceeded,
    WorkspaceState,
    reduce_store,
    reduce_workspace,
)
from record_portal.domain.exceptions import RecordNotFoundError
from record_portal.domain.models.record import RecordDraft, RecordStatus
from record_portal.governance.audit_builder import build_audit_entry


def test_records_loaded_bumps_version(make_record):
    state = reduce_store(StoreState(), RecordsLoaded((make_record("a"),)))
    assert state.version == 1
    assert [r.id for r in state.records] == ["a"]


def test_record_created_prepends(make_record, fixed_now):
    state = StoreState(records=(make_record("a"),), version=1)
    draft = RecordDraft(name="Musa Garba", nin="12345678901", phone_number="+2348012345678")
    nxt = reduce_store(state, RecordCreated(draft=draft, record_id="new-x", now=fixed_now))
    assert [r.id for r in nxt.records] == ["new-x", "a"]
    assert nxt.version == 2
    assert state.records[0].id == "a"


def test_record_modified_is_deterministic(make_record, agent, fixed_now):
    state = StoreState(records=(make_record("a"),), version=1)
    entry = build_audit_entry(state.records[0], {"name": "Danjuma Bello"}, "", agent, now=fixed_now)
    action = RecordModified(record_id="a", updates={"name": "Danjuma Bello"}, entry=entry, now=fixed_now)
    first = reduce_store(state, action)
    second = reduce_store(state, action)
    assert first == second
    assert first.records[0].status == RecordStatus.MODIFIED


def test_failed_action_leaves_state_alone(make_record, agent, fixed_now):
    state = StoreState(records=(make_record("a"),), version=1)
    ghost = make_record("ghost")
    entry = build_audit_entry(ghost, {"name": "Nobody Here"}, "", agent)
    with pytest.raises(RecordNotFoundError):
        reduce_store(state, RecordModified(record_id="ghost", updates={}, entry=entry, now=fixed_now))
    assert state.version == 1


def test_unknown_store_action_is_rejected():
    with pytest.raises(TypeError):
        reduce_store(StoreState(), object())  # type: ignore[arg-type]


def test_open_edit_then_close():
    state = reduce_workspace(WorkspaceState(), EditOpened("a"))
    assert state.modal == Editing("a")
    assert state.modal.kind == "editing"
    assert reduce_workspace(state, ModalClosed()).modal == CLOSED


def test_only_one_modal_at_a_time():
    editing = reduce_workspace(WorkspaceState(), EditOpened("a"))
    with pytest.raises(ModalStateError):
        reduce_workspace(editing, CreateOpened())
    creating = reduce_workspace(WorkspaceState(), CreateOpened())
    assert isinstance(creating.modal, Creating)
    with pytest.raises(ModalStateError):
        reduce_workspace(creating, EditOpened("a"))


def test_sync_lifecycle():
    state = reduce_workspace(WorkspaceState(), EditOpened("a"))
    syncing = reduce_workspace(state, SyncStarted())
    assert syncing.sync == SyncStatus.SYNCING
    with pytest.raises(ModalStateError):
        reduce_workspace(syncing, SyncStarted())

    failed = reduce_workspace(syncing, SyncFailed("server said no"))
    assert failed.sync == SyncStatus.FAILED
    assert failed.last_error == "server said no"
    assert failed.modal == Editing("a")

    retried = reduce_workspace(failed, SyncStarted())
    assert retried.sync == SyncStatus.SYNCING
    assert retried.last_error is None

    done = reduce_workspace(retried, SyncSucceeded())
    assert done == WorkspaceState()


def test_sync_requires_edit_form():
    with pytest.raises(ModalStateError):
        reduce_workspace(WorkspaceState(), SyncStarted())
    creating = reduce_workspace(WorkspaceState(), CreateOpened())
    with pytest.raises(ModalStateError):
        reduce_workspace(creating, SyncStarted())
