"""Record application service. Orchestrates validation, sync, audit and store updates."""

import logging
import uuid
from datetime import datetime, timezone
from typing import Mapping, Optional, Tuple

from record_portal.application.exceptions import SyncFailureError
from record_portal.application.record_store import RecordStore
from record_portal.application.state import RecordCreated, RecordModified
from record_portal.core.delayed_action import DelayedAction
from record_portal.domain.models.record import AgentIdentity, CitizenRecord, RecordDraft
from record_portal.domain.validators.record_validator import validate_new_record, validate_updates
from record_portal.governance.audit_builder import build_audit_entry, has_changes
from record_portal.governance.exceptions import NoChangesError
from record_portal.infrastructure.sync.simulated_sync import SimulatedSync
from record_portal.observability.metrics import MetricsCollector

SYNC_FAILED_MESSAGE = "Sync failed: the record server did not confirm the update. Please retry."

Updates = Mapping[str, Optional[str]]


class RecordService:
    """
    Application-layer orchestration only. No HTTP, no FastAPI.
    Edits are gated (validation, change check), then synced after a cancellable delay,
    and only a successful sync reaches the record mutator.
    """

    def __init__(
        self,
        store: RecordStore,
        sync: SimulatedSync,
        metrics: MetricsCollector,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._store = store
        self._sync = sync
        self._metrics = metrics
        self._logger = logger or logging.getLogger(__name__)

    @property
    def sync_delay_seconds(self) -> float:
        return self._sync.delay_seconds

    # --- reads ---

    def list_records(self, search: str = "") -> Tuple[int, Tuple[CitizenRecord, ...]]:
        """Total record count and the records matching search (all when blank)."""
        return len(self._store.records()), self._store.search(search)

    def get_record(self, record_id: str) -> CitizenRecord:
        return self._store.get(record_id)

    def first_record(self) -> Optional[CitizenRecord]:
        records = self._store.records()
        return records[0] if records else None

    # --- creation ---

    async def create_record(self, draft: RecordDraft) -> CitizenRecord:
        """Validate and insert a PENDING record at the front of the store."""
        validate_new_record(draft)
        record_id = f"new-{uuid.uuid4().hex}"
        async with self._store.lock:
            state = self._store.dispatch(
                RecordCreated(draft=draft, record_id=record_id, now=datetime.now(timezone.utc))
            )
        record = state.records[0]
        self._metrics.increment("records_created")
        self._logger.info("record_created", extra={"record_id": record.id})
        return record

    # --- modification ---

    def check_modification(self, record_id: str, updates: Updates, notes: str) -> CitizenRecord:
        """
        Submit gate. Validates field formats and requires a change or notes.
        Raises DomainValidationError, RecordNotFoundError or NoChangesError.
        """
        validate_updates(updates)
        record = self._store.get(record_id)
        if not has_changes(record, updates, notes):
            raise NoChangesError(f"No changes to record {record_id}")
        return record

    async def commit_modification(
        self, record_id: str, updates: Updates, notes: str, agent: AgentIdentity
    ) -> CitizenRecord:
        """Diff against the latest version, build the audit entry and apply it. The only write path."""
        async with self._store.lock:
            current = self._store.get(record_id)
            now = datetime.now(timezone.utc)
            entry = build_audit_entry(current, updates, notes, agent, now=now)
            changed = {name: updates[name] for name in entry.changes}
            state = self._store.dispatch(
                RecordModified(record_id=record_id, updates=changed, entry=entry, now=now)
            )
        self._metrics.increment("records_modified")
        self._logger.info(
            "record_modified",
            extra={
                "record_id": record_id,
                "audit_entry_id": entry.id,
                "changed_fields": sorted(entry.changes),
            },
        )
        return next(record for record in state.records if record.id == record_id)

    async def sync_and_commit(
        self, record_id: str, updates: Updates, notes: str, agent: AgentIdentity
    ) -> CitizenRecord:
        """Draw the sync outcome; on success apply the edit, on failure apply nothing."""
        if not self._sync.attempt():
            self._metrics.increment("sync_failures")
            self._logger.warning("sync_failed", extra={"record_id": record_id})
            raise SyncFailureError(SYNC_FAILED_MESSAGE)
        return await self.commit_modification(record_id, updates, notes, agent)

    def schedule_modification(
        self, record_id: str, updates: Updates, notes: str, agent: AgentIdentity
    ) -> DelayedAction[CitizenRecord]:
        """Gate the edit now and start the delayed sync. The caller may cancel it."""
        self.check_modification(record_id, updates, notes)
        action = DelayedAction(
            self._sync.delay_seconds,
            lambda: self.sync_and_commit(record_id, updates, notes, agent),
            name=f"sync:{record_id}",
        )
        self._logger.info("sync_scheduled", extra={"record_id": record_id})
        return action.start()

    async def submit_modification(
        self, record_id: str, updates: Updates, notes: str, agent: AgentIdentity
    ) -> CitizenRecord:
        """Gate, wait out the sync and return the updated record. Raises SyncFailureError."""
        return await self.schedule_modification(record_id, updates, notes, agent).wait()
