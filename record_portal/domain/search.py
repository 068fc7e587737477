"""Substring search over the record collection. Pure, recomputed on every keystroke."""

from typing import Sequence, Tuple

from record_portal.domain.models.record import CitizenRecord


def matches(record: CitizenRecord, term: str) -> bool:
    """Name matches case-insensitively; NIN and phone match verbatim."""
    return (
        term.lower() in record.name.lower()
        or term in record.nin
        or term in record.phone_number
    )


def filter_records(records: Sequence[CitizenRecord], term: str) -> Tuple[CitizenRecord, ...]:
    """Records whose name, NIN or phone contains term, in collection order. Empty term keeps all."""
    if not term:
        return tuple(records)
    return tuple(record for record in records if matches(record, term))
