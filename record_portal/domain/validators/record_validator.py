"""Validators for citizen record fields. Pure functions, no infrastructure or store access."""

import base64
import binascii
import re
from dataclasses import dataclass
from datetime import date
from typing import Any, List, Mapping, Optional

from record_portal.domain.exceptions import DomainValidationError
from record_portal.domain.models.record import TRACKED_FIELDS, RecordDraft

# Field constraints (domain constants; avoid magic numbers)
PHONE_PREFIX = "+234"
PHONE_LENGTH = 14
NIN_LENGTH = 11
NAME_MIN_LENGTH = 4

_PHONE_RE = re.compile(r"\+234[0-9]{10}")
_NIN_RE = re.compile(r"[0-9]{11}")
_NON_DIGIT_RE = re.compile(r"[^0-9]")
_PHOTO_RE = re.compile(r"data:(image/[a-zA-Z0-9.+-]+);base64,(.+)", re.DOTALL)


def is_valid_phone(value: Any) -> bool:
    """True iff value is exactly '+234' followed by 10 decimal digits (14 characters)."""
    return isinstance(value, str) and _PHONE_RE.fullmatch(value) is not None


def is_valid_nin(value: Any) -> bool:
    """True iff value is exactly 11 decimal digits."""
    return isinstance(value, str) and _NIN_RE.fullmatch(value) is not None


def is_name_valid(value: Any) -> bool:
    """True iff the trimmed name is longer than three characters."""
    return isinstance(value, str) and len(value.strip()) >= NAME_MIN_LENGTH


def is_valid_date_of_birth(value: Any) -> bool:
    """ISO calendar date (YYYY-MM-DD) not in the future."""
    if not isinstance(value, str):
        return False
    try:
        parsed = date.fromisoformat(value)
    except ValueError:
        return False
    return parsed <= date.today()


def is_valid_photo(value: Any) -> bool:
    """True iff value is a data URL carrying a base64-encoded image."""
    if not isinstance(value, str):
        return False
    match = _PHOTO_RE.fullmatch(value)
    if match is None:
        return False
    try:
        base64.b64decode(match.group(2), validate=True)
    except (binascii.Error, ValueError):
        return False
    return True


# ---------------------------------------------------------------------------
# Input masking (applied as the agent types)
# ---------------------------------------------------------------------------

def mask_phone_input(raw: str) -> str:
    """
    Force the +234 prefix, keep only digits after it, truncate to 14 characters.
    Deleting into the prefix restores it rather than shifting digits into it.
    """
    if PHONE_PREFIX.startswith(raw):
        return PHONE_PREFIX
    remainder = raw[len(PHONE_PREFIX):] if raw.startswith(PHONE_PREFIX) else raw
    digits = _NON_DIGIT_RE.sub("", remainder)
    return (PHONE_PREFIX + digits)[:PHONE_LENGTH]


def mask_nin_input(raw: str) -> str:
    """Strip non-digits and truncate to 11 characters."""
    return _NON_DIGIT_RE.sub("", raw)[:NIN_LENGTH]


def is_phone_prefix_plausible(partial: str) -> bool:
    """
    Whether a partially typed phone can still become valid: empty, a prefix of '+234',
    or '+234' followed only by digits, never longer than 14 characters.
    """
    if partial == "":
        return True
    if len(partial) > PHONE_LENGTH:
        return False
    if len(partial) <= len(PHONE_PREFIX):
        return PHONE_PREFIX.startswith(partial)
    if not partial.startswith(PHONE_PREFIX):
        return False
    return _NON_DIGIT_RE.search(partial[len(PHONE_PREFIX):]) is None


@dataclass(frozen=True)
class FieldValidity:
    """Per-field validation status for the new-record form."""

    name: bool
    nin: bool
    phone_number: bool

    @property
    def can_submit(self) -> bool:
        return self.name and self.nin and self.phone_number

    def invalid_fields(self) -> List[str]:
        return [
            field_name
            for field_name in ("name", "nin", "phone_number")
            if not getattr(self, field_name)
        ]


def check_draft(draft: RecordDraft) -> FieldValidity:
    """Evaluate name/NIN/phone of a draft without raising."""
    return FieldValidity(
        name=is_name_valid(draft.name),
        nin=is_valid_nin(draft.nin),
        phone_number=is_valid_phone(draft.phone_number),
    )


def validate_new_record(draft: RecordDraft) -> None:
    """Gate record creation on name, NIN and phone. Raises DomainValidationError listing bad fields."""
    validity = check_draft(draft)
    if not validity.can_submit:
        invalid = validity.invalid_fields()
        raise DomainValidationError(
            f"Invalid fields: {', '.join(invalid)}",
            fields=invalid,
        )
    if draft.date_of_birth is not None and not is_valid_date_of_birth(draft.date_of_birth):
        raise DomainValidationError("Invalid fields: date_of_birth", fields=["date_of_birth"])
    if draft.photo is not None and not is_valid_photo(draft.photo):
        raise DomainValidationError("Invalid fields: photo", fields=["photo"])


def _field_ok(field_name: str, value: Optional[str]) -> bool:
    if field_name == "phone_number":
        return is_valid_phone(value)
    if field_name == "nin":
        return is_valid_nin(value)
    if field_name == "name":
        return is_name_valid(value)
    if field_name == "date_of_birth":
        return value is None or is_valid_date_of_birth(value)
    if field_name == "photo":
        return value is None or is_valid_photo(value)
    if field_name == "local_government_area":
        return isinstance(value, str) and bool(value.strip())
    # address: free text, may be cleared
    return value is None or isinstance(value, str)


def validate_updates(updates: Mapping[str, Optional[str]]) -> None:
    """
    Validate a partial field-update set from the modification form.
    Unknown fields and format violations raise DomainValidationError.
    """
    unknown = [name for name in updates if name not in TRACKED_FIELDS]
    if unknown:
        raise DomainValidationError(
            f"Fields cannot be modified: {', '.join(sorted(unknown))}",
            fields=unknown,
        )
    invalid = [name for name in TRACKED_FIELDS if name in updates and not _field_ok(name, updates[name])]
    if invalid:
        raise DomainValidationError(f"Invalid fields: {', '.join(invalid)}", fields=invalid)
