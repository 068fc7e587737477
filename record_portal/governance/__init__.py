"""Governance: audit entry construction for record edits. No FastAPI."""

from record_portal.governance.audit_builder import build_audit_entry, diff_fields, has_changes
from record_portal.governance.exceptions import GovernanceError, NoChangesError

__all__ = [
    "GovernanceError",
    "NoChangesError",
    "build_audit_entry",
    "diff_fields",
    "has_changes",
]
