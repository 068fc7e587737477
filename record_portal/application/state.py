"""
Explicit application state and the pure reducers that update it.

The record collection is a tuple and is replaced wholesale on every change, so a
reader holding an old state never observes a partial update.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Mapping, Optional, Tuple, Union

from record_portal.application.exceptions import ModalStateError
from record_portal.domain.models.record import AuditEntry, CitizenRecord, RecordDraft
from record_portal.domain.mutations import apply_modification, create_record


# ---------------------------------------------------------------------------
# Modal sum type
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Closed:
    kind = "closed"


@dataclass(frozen=True)
class Editing:
    record_id: str
    kind = "editing"


@dataclass(frozen=True)
class Creating:
    kind = "creating"


ModalState = Union[Closed, Editing, Creating]

CLOSED = Closed()


class SyncStatus(str, Enum):
    IDLE = "idle"
    SYNCING = "syncing"
    FAILED = "failed"


# ---------------------------------------------------------------------------
# Record collection state
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StoreState:
    records: Tuple[CitizenRecord, ...] = ()
    version: int = 0


@dataclass(frozen=True)
class RecordsLoaded:
    records: Tuple[CitizenRecord, ...]


@dataclass(frozen=True)
class RecordCreated:
    draft: RecordDraft
    record_id: str
    now: datetime


@dataclass(frozen=True)
class RecordModified:
    record_id: str
    updates: Mapping[str, Optional[str]]
    entry: AuditEntry
    now: datetime


StoreAction = Union[RecordsLoaded, RecordCreated, RecordModified]


def reduce_store(state: StoreState, action: StoreAction) -> StoreState:
    """Pure: same state and action always yield the same next state."""
    if isinstance(action, RecordsLoaded):
        return StoreState(records=tuple(action.records), version=state.version + 1)
    if isinstance(action, RecordCreated):
        _, records = create_record(
            state.records, action.draft, now=action.now, record_id=action.record_id
        )
        return StoreState(records=records, version=state.version + 1)
    if isinstance(action, RecordModified):
        records = apply_modification(
            state.records, action.record_id, action.updates, action.entry, now=action.now
        )
        return StoreState(records=records, version=state.version + 1)
    raise TypeError(f"Unknown store action: {type(action).__name__}")


# ---------------------------------------------------------------------------
# Per-agent workspace state
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class WorkspaceState:
    modal: ModalState = CLOSED
    sync: SyncStatus = SyncStatus.IDLE
    last_error: Optional[str] = None


@dataclass(frozen=True)
class EditOpened:
    record_id: str


@dataclass(frozen=True)
class CreateOpened:
    pass


@dataclass(frozen=True)
class ModalClosed:
    pass


@dataclass(frozen=True)
class SyncStarted:
    pass


@dataclass(frozen=True)
class SyncFailed:
    message: str


@dataclass(frozen=True)
class SyncSucceeded:
    pass


WorkspaceAction = Union[EditOpened, CreateOpened, ModalClosed, SyncStarted, SyncFailed, SyncSucceeded]


def _require_closed(state: WorkspaceState) -> None:
    if not isinstance(state.modal, Closed):
        raise ModalStateError(f"Another form is already open ({state.modal.kind})")


def reduce_workspace(state: WorkspaceState, action: WorkspaceAction) -> WorkspaceState:
    """Pure modal/sync transitions. Only one modal may be open at a time."""
    if isinstance(action, EditOpened):
        _require_closed(state)
        return WorkspaceState(modal=Editing(action.record_id))
    if isinstance(action, CreateOpened):
        _require_closed(state)
        return WorkspaceState(modal=Creating())
    if isinstance(action, ModalClosed):
        return WorkspaceState()
    if isinstance(action, SyncStarted):
        if not isinstance(state.modal, Editing):
            raise ModalStateError("No record is open for editing")
        if state.sync == SyncStatus.SYNCING:
            raise ModalStateError("A sync is already in progress")
        return replace(state, sync=SyncStatus.SYNCING, last_error=None)
    if isinstance(action, SyncFailed):
        return replace(state, sync=SyncStatus.FAILED, last_error=action.message)
    if isinstance(action, SyncSucceeded):
        # a successful save closes the form
        return WorkspaceState()
    raise TypeError(f"Unknown workspace action: {type(action).__name__}")
