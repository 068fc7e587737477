"""Auth API router: POST /auth/login (simulated), POST /auth/logout."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from record_portal.api.dependencies import get_authenticator, get_metrics, get_session, get_workspace
from record_portal.application.workspace import Workspace
from record_portal.domain.schemas.session import LoginRequest, LoginResponse
from record_portal.observability.metrics import MetricsCollector
from record_portal.security.auth import AgentSession, SimulatedAuthenticator
from record_portal.security.exceptions import AuthenticationError

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    authenticator: Annotated[SimulatedAuthenticator, Depends(get_authenticator)],
    metrics: Annotated[MetricsCollector, Depends(get_metrics)],
):
    """Compare the credentials against the single configured pair after a simulated delay."""
    try:
        session = await authenticator.login(body.username, body.password)
    except AuthenticationError:
        metrics.increment("login_failures")
        raise
    return LoginResponse(
        token=session.token,
        agent_id=session.agent.agent_id,
        agent_name=session.agent.agent_name,
    )


@router.post("/logout", status_code=204)
async def logout(
    request: Request,
    session: Annotated[AgentSession, Depends(get_session)],
    workspace: Annotated[Workspace, Depends(get_workspace)],
):
    """End the session. An open form is closed and its pending sync cancelled."""
    workspace.close()
    request.app.state.workspaces.discard(session.token)
    request.app.state.sessions.close(session.token)
