"""Capture API router: POST /capture/photo turns a captured frame into a photo data URL."""

from typing import Annotated

from fastapi import APIRouter, Depends

from record_portal.api.dependencies import get_capture_service
from record_portal.domain.schemas.session import PhotoCaptureRequest, PhotoCaptureResponse
from record_portal.infrastructure.capture.photo_capture import PhotoCaptureService, UploadedFrameSource

router = APIRouter()


@router.post("/photo", response_model=PhotoCaptureResponse)
async def capture_photo(
    body: PhotoCaptureRequest,
    capture_service: Annotated[PhotoCaptureService, Depends(get_capture_service)],
):
    """Capture failures are reported in `error` with a 200, never as a server error."""
    outcome = await capture_service.capture(UploadedFrameSource(body.frame_base64), body.mime_type)
    return PhotoCaptureResponse(photo=outcome.photo, error=outcome.error)
