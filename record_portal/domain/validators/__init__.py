"""Domain validators. Pure functions."""

from record_portal.domain.validators.record_validator import (
    FieldValidity,
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

__all__ = [
    "FieldValidity",
    "check_draft",
    "is_name_valid",
    "is_phone_prefix_plausible",
    "is_valid_date_of_birth",
    "is_valid_nin",
    "is_valid_phone",
    "is_valid_photo",
    "mask_nin_input",
    "mask_phone_input",
    "validate_new_record",
    "validate_updates",
]
