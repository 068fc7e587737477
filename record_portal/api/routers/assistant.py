"""Assistant API router: POST /assistant/guidance."""

from typing import Annotated

from fastapi import APIRouter, Depends

from record_portal.api.dependencies import get_guidance_service, get_record_service
from record_portal.application.guidance_service import GuidanceService
from record_portal.application.record_service import RecordService
from record_portal.domain.schemas.session import GuidanceRequest, GuidanceResponse

router = APIRouter()


@router.post("/guidance", response_model=GuidanceResponse)
async def ask_guidance(
    body: GuidanceRequest,
    record_service: Annotated[RecordService, Depends(get_record_service)],
    guidance_service: Annotated[GuidanceService, Depends(get_guidance_service)],
):
    """Guidance about the selected record, or the first record when none is selected."""
    if body.record_id is not None:
        record = record_service.get_record(body.record_id)
    else:
        record = record_service.first_record()
    result = await guidance_service.ask(body.query, record)
    return GuidanceResponse(guidance=result.text, record_id=result.record_id, fallback=result.fallback)
