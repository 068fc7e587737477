"""Per-agent workspace: the open form (modal) and its in-flight sync."""

import logging
import threading
from typing import Optional

from record_portal.application.exceptions import ApplicationError, ModalStateError
from record_portal.application.record_service import RecordService, Updates
from record_portal.application.state import (
    CreateOpened,
    Creating,
    EditOpened,
    Editing,
    ModalClosed,
    SyncFailed,
    SyncStarted,
    SyncSucceeded,
    WorkspaceAction,
    WorkspaceState,
    reduce_workspace,
)
from record_portal.core.delayed_action import DelayedAction
from record_portal.domain.exceptions import DomainError
from record_portal.domain.models.record import AgentIdentity, CitizenRecord, RecordDraft
from record_portal.governance.exceptions import GovernanceError

logger = logging.getLogger(__name__)

SYNC_ERROR_MESSAGE = "Sync failed unexpectedly. Please retry."


class Workspace:
    """
    One agent's UI state. Closing the form cancels a pending sync, and a sync that
    fires for a form that is no longer open is refused, so no stale edit lands.
    """

    def __init__(self, service: RecordService, agent: AgentIdentity) -> None:
        self._service = service
        self._agent = agent
        self._state = WorkspaceState()
        self._pending: Optional[DelayedAction[Optional[CitizenRecord]]] = None

    @property
    def state(self) -> WorkspaceState:
        return self._state

    @property
    def agent(self) -> AgentIdentity:
        return self._agent

    @property
    def pending(self) -> Optional[DelayedAction[Optional[CitizenRecord]]]:
        return self._pending

    def _apply(self, action: WorkspaceAction) -> WorkspaceState:
        self._state = reduce_workspace(self._state, action)
        return self._state

    def open_editing(self, record_id: str) -> WorkspaceState:
        self._service.get_record(record_id)
        return self._apply(EditOpened(record_id))

    def open_creating(self) -> WorkspaceState:
        return self._apply(CreateOpened())

    def close(self) -> WorkspaceState:
        """Close whatever form is open. A sync still waiting out its delay is cancelled."""
        if self._pending is not None and self._pending.cancel():
            logger.info("sync_cancelled_on_close", extra={"action": self._pending.name})
        self._pending = None
        return self._apply(ModalClosed())

    async def create(self, draft: RecordDraft) -> CitizenRecord:
        if not isinstance(self._state.modal, Creating):
            raise ModalStateError("The new-record form is not open")
        record = await self._service.create_record(draft)
        self._apply(ModalClosed())
        return record

    def submit(self, updates: Updates, notes: str) -> DelayedAction[Optional[CitizenRecord]]:
        """Gate the edit and start its delayed sync. Progress is visible through `state`."""
        modal = self._state.modal
        if not isinstance(modal, Editing):
            raise ModalStateError("No record is open for editing")
        self._service.check_modification(modal.record_id, updates, notes)
        self._apply(SyncStarted())
        self._pending = DelayedAction(
            self._service.sync_delay_seconds,
            lambda: self._complete(modal, updates, notes),
            name=f"sync:{modal.record_id}",
        ).start()
        return self._pending

    async def _complete(self, modal: Editing, updates: Updates, notes: str) -> Optional[CitizenRecord]:
        if self._state.modal != modal:
            logger.warning("stale_sync_discarded", extra={"record_id": modal.record_id})
            return None
        try:
            record = await self._service.sync_and_commit(modal.record_id, updates, notes, self._agent)
        except (ApplicationError, DomainError, GovernanceError) as e:
            self._apply(SyncFailed(e.message))
            return None
        except Exception:
            logger.exception("sync_crashed", extra={"record_id": modal.record_id})
            self._apply(SyncFailed(SYNC_ERROR_MESSAGE))
            return None
        finally:
            self._pending = None
        self._apply(SyncSucceeded())
        return record


class WorkspaceRegistry:
    """Session token -> Workspace."""

    def __init__(self, service: RecordService) -> None:
        self._service = service
        self._lock = threading.Lock()
        self._workspaces: dict[str, Workspace] = {}

    def get(self, token: str, agent: AgentIdentity) -> Workspace:
        with self._lock:
            workspace = self._workspaces.get(token)
            if workspace is None:
                workspace = Workspace(self._service, agent)
                self._workspaces[token] = workspace
            return workspace

    def discard(self, token: str) -> Optional[Workspace]:
        """Forget the workspace of an ended session. The caller closes it first."""
        with self._lock:
            return self._workspaces.pop(token, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._workspaces)
