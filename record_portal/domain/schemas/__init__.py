"""Pydantic schemas for API serialization."""

from record_portal.domain.schemas.record import (
    AuditEntryResponse,
    RecordCreateRequest,
    RecordListResponse,
    RecordModificationRequest,
    RecordResponse,
)
from record_portal.domain.schemas.session import (
    GuidanceRequest,
    GuidanceResponse,
    LoginRequest,
    LoginResponse,
    PhotoCaptureRequest,
    PhotoCaptureResponse,
    WorkspaceResponse,
)

__all__ = [
    "AuditEntryResponse",
    "GuidanceRequest",
    "GuidanceResponse",
    "LoginRequest",
    "LoginResponse",
    "PhotoCaptureRequest",
    "PhotoCaptureResponse",
    "RecordCreateRequest",
    "RecordListResponse",
    "RecordModificationRequest",
    "RecordResponse",
    "WorkspaceResponse",
]
