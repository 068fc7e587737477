# Application layer: services that orchestrate domain, governance and collaborators.

from record_portal.application.exceptions import (
    ApplicationError,
    ModalStateError,
    SyncFailureError,
)
from record_portal.application.guidance_service import GuidanceResult, GuidanceService
from record_portal.application.record_service import RecordService
from record_portal.application.record_store import RecordStore
from record_portal.application.workspace import Workspace, WorkspaceRegistry

__all__ = [
    "ApplicationError",
    "GuidanceResult",
    "GuidanceService",
    "ModalStateError",
    "RecordService",
    "RecordStore",
    "SyncFailureError",
    "Workspace",
    "WorkspaceRegistry",
]
