"""FastAPI dependency injection: services from app.state, the current agent session, correlation_id."""

from typing import Annotated

from fastapi import Depends, Request

from record_portal.application.guidance_service import GuidanceService
from record_portal.application.record_service import RecordService
from record_portal.application.workspace import Workspace, WorkspaceRegistry
from record_portal.infrastructure.capture.photo_capture import PhotoCaptureService
from record_portal.observability.metrics import MetricsCollector
from record_portal.security.auth import AgentSession, SimulatedAuthenticator


def get_record_service(request: Request) -> RecordService:
    return request.app.state.record_service


def get_authenticator(request: Request) -> SimulatedAuthenticator:
    return request.app.state.authenticator


def get_guidance_service(request: Request) -> GuidanceService:
    return request.app.state.guidance_service


def get_capture_service(request: Request) -> PhotoCaptureService:
    return request.app.state.capture_service


def get_metrics(request: Request) -> MetricsCollector:
    return request.app.state.metrics


def get_session(request: Request) -> AgentSession:
    """Extract the agent session from request.state (set by middleware)."""
    return request.state.session


def get_workspace(
    request: Request,
    session: Annotated[AgentSession, Depends(get_session)],
) -> Workspace:
    registry: WorkspaceRegistry = request.app.state.workspaces
    return registry.get(session.token, session.agent)


def get_correlation_id(request: Request) -> str:
    """Extract correlation_id from request.state (set by middleware)."""
    return getattr(request.state, "correlation_id", "") or ""
