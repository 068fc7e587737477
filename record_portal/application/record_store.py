"""In-memory record store: holds the current StoreState and applies actions through the reducer."""

import asyncio
from typing import Sequence, Tuple

from record_portal.application.state import RecordsLoaded, StoreAction, StoreState, reduce_store
from record_portal.domain.models.record import CitizenRecord
from record_portal.domain.mutations import find_record
from record_portal.domain.search import filter_records


class RecordStore:
    """
    Sole owner of the session's records. State is swapped atomically after the
    reducer returns; a failed action leaves the previous state in place.
    """

    def __init__(self, records: Sequence[CitizenRecord] = ()) -> None:
        self._state = reduce_store(StoreState(), RecordsLoaded(tuple(records)))
        self._lock = asyncio.Lock()

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def lock(self) -> asyncio.Lock:
        """Held across read-diff-dispatch sequences so concurrent edits serialize."""
        return self._lock

    def records(self) -> Tuple[CitizenRecord, ...]:
        return self._state.records

    def get(self, record_id: str) -> CitizenRecord:
        """Raises RecordNotFoundError if record_id is unknown."""
        return find_record(self._state.records, record_id)

    def search(self, term: str) -> Tuple[CitizenRecord, ...]:
        return filter_records(self._state.records, term)

    def dispatch(self, action: StoreAction) -> StoreState:
        """Apply action and publish the resulting state. Callers writing concurrently hold `lock`."""
        self._state = reduce_store(self._state, action)
        return self._state
