"""Records API router: list/search, read, history, create, modify."""

from typing import Annotated, List

from fastapi import APIRouter, Depends, Query

from record_portal.api.dependencies import get_record_service, get_session
from record_portal.application.record_service import RecordService
from record_portal.domain.schemas.record import (
    AuditEntryResponse,
    RecordCreateRequest,
    RecordListResponse,
    RecordModificationRequest,
    RecordResponse,
)
from record_portal.security.auth import AgentSession

router = APIRouter()


@router.get("/", response_model=RecordListResponse)
async def list_records(
    record_service: Annotated[RecordService, Depends(get_record_service)],
    search: Annotated[str, Query(description="Substring of name, NIN or phone")] = "",
):
    total, records = record_service.list_records(search)
    return RecordListResponse(
        total=total,
        showing=len(records),
        records=[RecordResponse.from_domain(record) for record in records],
    )


@router.get("/{record_id}", response_model=RecordResponse)
async def get_record(
    record_id: str,
    record_service: Annotated[RecordService, Depends(get_record_service)],
):
    return RecordResponse.from_domain(record_service.get_record(record_id))


@router.get("/{record_id}/history", response_model=List[AuditEntryResponse])
async def get_history(
    record_id: str,
    record_service: Annotated[RecordService, Depends(get_record_service)],
):
    """Modification history, newest first."""
    record = record_service.get_record(record_id)
    return [AuditEntryResponse.from_domain(entry) for entry in record.modification_history]


@router.post("/", response_model=RecordResponse, status_code=201)
async def create_record(
    body: RecordCreateRequest,
    record_service: Annotated[RecordService, Depends(get_record_service)],
):
    """Create a PENDING record at the top of the store. Name, NIN and phone must be valid."""
    record = await record_service.create_record(body.to_draft())
    return RecordResponse.from_domain(record)


@router.post("/{record_id}/modifications", response_model=RecordResponse)
async def modify_record(
    record_id: str,
    body: RecordModificationRequest,
    record_service: Annotated[RecordService, Depends(get_record_service)],
    session: Annotated[AgentSession, Depends(get_session)],
):
    """Validate, sync (simulated) and apply an edit. 503 on sync failure; nothing is applied."""
    record = await record_service.submit_modification(
        record_id, body.updates(), body.notes, session.agent
    )
    return RecordResponse.from_domain(record)
