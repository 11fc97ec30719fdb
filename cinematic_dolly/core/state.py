"""State definitions for a video generation attempt"""

from dataclasses import dataclass
from typing import Optional, TypedDict


class GenerationState(TypedDict):
    is_generating: bool
    status: str
    progress: int  # 0-100
    video_url: Optional[str]  # /videos/<id> once completed
    error: Optional[str]
    error_kind: Optional[str]  # GenerationError.kind


def idle_state() -> GenerationState:
    return {
        "is_generating": False,
        "status": "",
        "progress": 0,
        "video_url": None,
        "error": None,
        "error_kind": None,
    }


@dataclass(frozen=True)
class ImagePayload:
    """Uploaded source image, passed by value into the orchestrator"""
    data: bytes
    mime_type: str

    @property
    def base64(self) -> str:
        import base64
        return base64.b64encode(self.data).decode('utf-8')


@dataclass(frozen=True)
class GenerationRequest:
    image: ImagePayload
    mood: str = ""


@dataclass(frozen=True)
class ProgressReport:
    message: str
    percent: int
