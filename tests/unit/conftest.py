"""Shared fixtures: deterministic records, an agent identity, zero-delay services."""

import random
from datetime import datetime, timezone

import pytest

from record_portal.application.record_service import RecordService
from record_portal.application.record_store import RecordStore
from record_portal.domain.models.record import AgentIdentity, CitizenRecord, Gender, RecordStatus
from record_portal.infrastructure.seed.synthetic_records import generate_mock_records
from record_portal.infrastructure.sync.simulated_sync import SimulatedSync
from record_portal.observability.metrics import MetricsCollector

FIXED_NOW = datetime(2026, 1, 28, 9, 30, tzinfo=timezone.utc)


def _build_record(record_id: str = "r1", **overrides) -> CitizenRecord:
    fields = dict(
        id=record_id,
        name="Danjuma Musa",
        nin="12345678901",
        phone_number="+2348031234567",
        gender=Gender.MALE,
        state_of_origin="Sokoto",
        local_government_area="Rabah",
        status=RecordStatus.VERIFIED,
        last_modified=FIXED_NOW,
    )
    fields.update(overrides)
    return CitizenRecord(**fields)


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def make_record():
    """Factory for a valid VERIFIED record; keyword overrides replace any field."""
    return _build_record


@pytest.fixture
def agent():
    return AgentIdentity(agent_id="AGT-7742", agent_name="Jabir")


@pytest.fixture
def seeded_records():
    return generate_mock_records(25, rng=random.Random(42), now=FIXED_NOW)


@pytest.fixture
def metrics():
    return MetricsCollector()


@pytest.fixture
def store(seeded_records):
    return RecordStore(seeded_records)


@pytest.fixture
def always_sync():
    return SimulatedSync(delay_seconds=0.0, success_rate=1.0)


@pytest.fixture
def never_sync():
    return SimulatedSync(delay_seconds=0.0, success_rate=0.0)


@pytest.fixture
def record_service(store, always_sync, metrics):
    return RecordService(store=store, sync=always_sync, metrics=metrics)
