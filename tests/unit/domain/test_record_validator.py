"""Validator tests: phone/NIN/name predicates, input masking, submit gating."""

import pytest

from record_portal.domain.exceptions import DomainValidationError
from record_portal.domain.models.record import RecordDraft
from record_portal.domain.validators.record_validator import (
    check_draft,
    is_name_valid,
    is_phone_prefix_plausible,
    is_valid_date_of_birth,
    is_valid_nin,
    is_valid_phone,
    is_valid_photo,
    mask_nin_input,
    mask_phone_input,
    validate_new_record,
    validate_updates,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("+2348031234567", True),
        ("+234803123456", False),  # 13 characters
        ("+23480312345678", False),  # 15 characters
        ("2348031234567", False),
        ("+2358031234567", False),
        ("+234803123456a", False),
        ("+2348031234567\n", False),
        ("+234٨٠٣١٢٣٤٥٦٧", False),  # non-ASCII digits
        ("", False),
        (None, False),
    ],
)
def test_is_valid_phone(value, expected):
    assert is_valid_phone(value) is expected


@pytest.mark.parametrize(
    "value,expected",
    [
        ("38820058810", True),
        ("3882005881", False),  # 10 digits
        ("388200588101", False),
        ("3882005881a", False),
        (" 38820058810", False),
        (38820058810, False),
    ],
)
def test_is_valid_nin(value, expected):
    assert is_valid_nin(value) is expected


def test_is_name_valid_uses_trimmed_length():
    assert is_name_valid("Musa")
    assert not is_name_valid("Abu")
    assert not is_name_valid("  Abu   ")
    assert not is_name_valid("")


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("", "+234"),
        ("+23", "+234"),
        ("+234", "+234"),
        ("+234803-123 4567", "+2348031234567"),
        ("+2348031234567999", "+2348031234567"),
        ("8031234567", "+2348031234567"),
    ],
)
def test_mask_phone_input(raw, expected):
    assert mask_phone_input(raw) == expected


def test_mask_nin_input_strips_and_truncates():
    assert mask_nin_input("388-200 58810xx9") == "38820058810"
    assert mask_nin_input("abc") == ""


@pytest.mark.parametrize(
    "partial,expected",
    [
        ("", True),
        ("+", True),
        ("+23", True),
        ("+234803", True),
        ("+2348031234567", True),
        ("+2", True),
        ("2", False),
        ("+235", False),
        ("+234803a", False),
        ("+23480312345678", False),
    ],
)
def test_is_phone_prefix_plausible(partial, expected):
    assert is_phone_prefix_plausible(partial) is expected


def test_check_draft_reports_each_field():
    validity = check_draft(RecordDraft(name="Abu", nin="123", phone_number="+2348012345678"))
    assert not validity.can_submit
    assert validity.invalid_fields() == ["name", "nin"]


def test_validate_new_record_lists_invalid_fields():
    draft = RecordDraft(name="Musa Garba", nin="12345", phone_number="+234801")
    with pytest.raises(DomainValidationError) as exc_info:
        validate_new_record(draft)
    assert exc_info.value.fields == ("nin", "phone_number")


def test_validate_new_record_accepts_valid_draft():
    validate_new_record(
        RecordDraft(name="Musa Garba", nin="12345678901", phone_number="+2348012345678")
    )


def test_validate_updates_rejects_unknown_fields():
    with pytest.raises(DomainValidationError) as exc_info:
        validate_updates({"status": "Verified"})
    assert "status" in exc_info.value.fields


def test_validate_updates_checks_formats_of_sent_fields_only():
    validate_updates({"local_government_area": "Wamakko", "address": None})
    with pytest.raises(DomainValidationError) as exc_info:
        validate_updates({"phone_number": "+23480", "local_government_area": "  "})
    assert exc_info.value.fields == ("phone_number", "local_government_area")


def test_date_of_birth_must_be_iso_and_not_future():
    assert is_valid_date_of_birth("1990-05-17")
    assert not is_valid_date_of_birth("17/05/1990")
    assert not is_valid_date_of_birth("2999-01-01")


def test_is_valid_photo():
    assert is_valid_photo("data:image/png;base64,iVBORw0KGgo=")
    assert not is_valid_photo("data:text/plain;base64,aGVsbG8=")
    assert not is_valid_photo("data:image/png;base64,***")
    assert not is_valid_photo("iVBORw0KGgo=")
