"""Pydantic schemas for login, workspace, assistant and capture endpoints."""

from typing import Literal, Optional

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    token: str
    agent_id: str
    agent_name: str


class WorkspaceResponse(BaseModel):
    """Snapshot of one agent's workspace: which modal is open and the sync state."""

    modal: Literal["closed", "editing", "creating"]
    record_id: Optional[str] = None
    sync_status: Literal["idle", "syncing", "failed"]
    last_error: Optional[str] = None


class GuidanceRequest(BaseModel):
    query: str
    record_id: Optional[str] = None


class GuidanceResponse(BaseModel):
    guidance: str
    record_id: Optional[str] = None
    fallback: bool = False


class PhotoCaptureRequest(BaseModel):
    frame_base64: str = Field(..., description="Raw captured frame, base64-encoded")
    mime_type: str = "image/jpeg"


class PhotoCaptureResponse(BaseModel):
    photo: Optional[str] = None
    error: Optional[str] = None
