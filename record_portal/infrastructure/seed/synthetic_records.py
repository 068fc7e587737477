"""Synthetic citizen records for the in-memory store. Generated once at startup."""

import random
from datetime import datetime, timedelta, timezone
from types import MappingProxyType
from typing import List, Optional, Tuple

from record_portal.domain.models.record import (
    AuditEntry,
    CitizenRecord,
    FieldChange,
    Gender,
    RecordStatus,
)

HAUSA_FIRST_NAMES = (
    "Musa", "Sani", "Fatima", "Zainab", "Amina", "Ibrahim", "Abubakar", "Umar",
    "Aisha", "Hadiza", "Bello", "Usman", "Salisu", "Kabiru", "Bashir", "Maryam",
    "Aliyu", "Hassan", "Hussaini", "Rukayya", "Lauwali", "Nura", "Rabiu", "Habibu",
)

HAUSA_LAST_NAMES = (
    "Danjuma", "Bako", "Garba", "Gwadabe", "Yusuf", "Abdullahi", "Muhammed",
    "Shehu", "Tukur", "Jibrin", "Maina", "Ladan", "Buhari", "Kwankwaso", "Ribadu",
)

DEFAULT_STATE = "Sokoto"
DEFAULT_LGA = "Rabah"
MIGRATION_AGENT_ID = "AGT-882"
MIGRATION_AGENT_NAME = "System Migration"
HISTORY_PROBABILITY = 0.2
MIGRATION_AGE = timedelta(milliseconds=500_000_000)
MAX_RECORD_AGE = timedelta(milliseconds=10_000_000_000)

_SEEDED_STATUSES = (RecordStatus.VERIFIED, RecordStatus.PENDING, RecordStatus.FLAGGED)


def generate_nin(rng: random.Random) -> str:
    return str(rng.randint(10_000_000_000, 99_999_999_999))


def generate_phone(rng: random.Random) -> str:
    return f"+234{rng.randint(7_000_000_000, 9_999_999_999)}"


def seed_record(now: datetime) -> CitizenRecord:
    """The fixed record '0' every store starts with."""
    return CitizenRecord(
        id="0",
        name="Lauwali Rukayyan",
        nin="38820058810",
        phone_number="+2348031234567",
        gender=Gender.MALE,
        state_of_origin=DEFAULT_STATE,
        local_government_area=DEFAULT_LGA,
        status=RecordStatus.PENDING,
        last_modified=now,
        modification_history=(),
    )


def _migration_history(record_id: str, rng: random.Random, now: datetime) -> Tuple[AuditEntry, ...]:
    # roughly one record in five carries a migration entry
    if rng.random() <= 1 - HISTORY_PROBABILITY:
        return ()
    return (
        AuditEntry(
            id=f"hist-{record_id}-1",
            record_id=record_id,
            changes=MappingProxyType(
                {"phone_number": FieldChange(old=generate_phone(rng), new=generate_phone(rng))}
            ),
            notes="",
            timestamp=now - MIGRATION_AGE,
            agent_id=MIGRATION_AGENT_ID,
            agent_name=MIGRATION_AGENT_NAME,
        ),
    )


def generate_mock_records(
    count: int,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> List[CitizenRecord]:
    """
    Build `count` records: the fixed seed record followed by randomized ones with
    Hausa names, valid NIN/phone formats and an occasional migration history entry.
    """
    rng = rng or random.Random()
    now = now or datetime.now(timezone.utc)
    if count <= 0:
        return []
    records = [seed_record(now)]
    for i in range(1, count):
        record_id = str(i)
        first_name = rng.choice(HAUSA_FIRST_NAMES)
        last_name = rng.choice(HAUSA_LAST_NAMES)
        history = _migration_history(record_id, rng, now)
        records.append(
            CitizenRecord(
                id=record_id,
                name=f"{last_name} {first_name}",
                nin=generate_nin(rng),
                phone_number=generate_phone(rng),
                gender=Gender.MALE if rng.random() > 0.5 else Gender.FEMALE,
                state_of_origin=DEFAULT_STATE,
                local_government_area=DEFAULT_LGA,
                status=rng.choice(_SEEDED_STATUSES),
                last_modified=now - rng.random() * MAX_RECORD_AGE,
                modification_history=history,
            )
        )
    return records
