"""Photo capture collaborator: turns a captured frame into a base64 image data URL."""

import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Optional, Protocol

logger = logging.getLogger(__name__)

SUPPORTED_MIME_TYPES = frozenset({"image/jpeg", "image/png", "image/webp"})
CAPTURE_FAILED_MESSAGE = "Unable to access camera. Please check permissions."


class CaptureDeviceError(Exception):
    """Raised by a frame source when the device cannot deliver a frame."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class FrameSource(Protocol):
    """Something that can hand over the current frame of a video stream."""

    async def read_frame(self) -> bytes:
        ...


class UploadedFrameSource:
    """Frame grabbed client-side and posted to the portal as base64."""

    def __init__(self, frame_base64: str) -> None:
        self._frame_base64 = frame_base64

    async def read_frame(self) -> bytes:
        try:
            return base64.b64decode(self._frame_base64, validate=True)
        except (binascii.Error, ValueError) as e:
            raise CaptureDeviceError("Captured frame is not valid base64") from e


@dataclass(frozen=True)
class CaptureOutcome:
    photo: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.photo is not None


def encode_photo(frame: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(frame).decode('ascii')}"


class PhotoCaptureService:
    """Capture a frame and encode it. Device or permission failures become a CaptureOutcome error."""

    async def capture(self, source: FrameSource, mime_type: str = "image/jpeg") -> CaptureOutcome:
        if mime_type not in SUPPORTED_MIME_TYPES:
            return CaptureOutcome(error=f"Unsupported image type: {mime_type}")
        try:
            frame = await source.read_frame()
        except CaptureDeviceError as e:
            logger.warning("photo_capture_failed", extra={"error": e.message})
            return CaptureOutcome(error=e.message)
        except (PermissionError, OSError) as e:
            logger.warning("photo_capture_failed", extra={"error": str(e)})
            return CaptureOutcome(error=CAPTURE_FAILED_MESSAGE)
        if not frame:
            return CaptureOutcome(error="No frame captured")
        return CaptureOutcome(photo=encode_photo(frame, mime_type))
