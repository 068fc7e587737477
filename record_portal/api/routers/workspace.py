"""Workspace API router: the agent's open form and its background sync."""

from typing import Annotated

from fastapi import APIRouter, Depends

from record_portal.api.dependencies import get_workspace
from record_portal.application.state import Editing, WorkspaceState
from record_portal.application.workspace import Workspace
from record_portal.domain.schemas.record import (
    RecordCreateRequest,
    RecordModificationRequest,
    RecordResponse,
)
from record_portal.domain.schemas.session import WorkspaceResponse

router = APIRouter()


def _to_response(state: WorkspaceState) -> WorkspaceResponse:
    return WorkspaceResponse(
        modal=state.modal.kind,
        record_id=state.modal.record_id if isinstance(state.modal, Editing) else None,
        sync_status=state.sync.value,
        last_error=state.last_error,
    )


@router.get("/", response_model=WorkspaceResponse)
async def get_workspace_state(workspace: Annotated[Workspace, Depends(get_workspace)]):
    return _to_response(workspace.state)


@router.post("/modal/edit/{record_id}", response_model=WorkspaceResponse)
async def open_edit_form(record_id: str, workspace: Annotated[Workspace, Depends(get_workspace)]):
    return _to_response(workspace.open_editing(record_id))


@router.post("/modal/create", response_model=WorkspaceResponse)
async def open_create_form(workspace: Annotated[Workspace, Depends(get_workspace)]):
    return _to_response(workspace.open_creating())


@router.delete("/modal", response_model=WorkspaceResponse)
async def close_form(workspace: Annotated[Workspace, Depends(get_workspace)]):
    """Close the open form. A sync still waiting out its delay is cancelled."""
    return _to_response(workspace.close())


@router.post("/submit", response_model=WorkspaceResponse, status_code=202)
async def submit_edit(
    body: RecordModificationRequest,
    workspace: Annotated[Workspace, Depends(get_workspace)],
):
    """Start the delayed sync for the record being edited. Poll GET /workspace for the outcome."""
    workspace.submit(body.updates(), body.notes)
    return _to_response(workspace.state)


@router.post("/create", response_model=RecordResponse, status_code=201)
async def submit_new_record(
    body: RecordCreateRequest,
    workspace: Annotated[Workspace, Depends(get_workspace)],
):
    record = await workspace.create(body.to_draft())
    return RecordResponse.from_domain(record)
