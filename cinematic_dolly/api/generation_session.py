"""Single-user generation session shared by the HTTP and WebSocket handlers"""

import asyncio
import logging
import threading
from typing import Optional

from ..core.credentials import ApiKeyProvider
from ..core.errors import GenerationError, CredentialExpiredError
from ..core.state import GenerationState, GenerationRequest, idle_state
from ..storage.video_store import VideoStore, VideoResource
from ..agents.system.video_task_monitor import generate_cinematic_video

logger = logging.getLogger(__name__)


class GenerationInProgressError(RuntimeError):
    """A new generation was requested before the previous one settled"""


class GenerationSession:
    """Owns the generation state and the currently displayed video"""

    def __init__(self, key_provider: ApiKeyProvider, generator, store: VideoStore, **monitor_options):
        self.key_provider = key_provider
        self.generator = generator
        self.store = store
        self.monitor_options = monitor_options
        self.current_video: Optional[VideoResource] = None
        self._state: GenerationState = idle_state()
        self._version = 0
        self._lock = threading.Lock()

    @property
    def state(self) -> GenerationState:
        with self._lock:
            return dict(self._state)

    @property
    def version(self) -> int:
        """Incremented on every state change"""
        with self._lock:
            return self._version

    def _update(self, **changes):
        with self._lock:
            self._state.update(changes)
            self._version += 1

    def _on_progress(self, message: str, percent: int):
        self._update(status=message, progress=percent)

    def release_current_video(self) -> bool:
        video, self.current_video = self.current_video, None
        if video is None:
            return False
        released = video.release()
        if self.state["video_url"] == video.url:
            self._update(video_url=None)
        return released

    def begin(self) -> GenerationState:
        """Mark a generation as started; the caller schedules run()"""
        with self._lock:
            if self._state["is_generating"]:
                raise GenerationInProgressError("A video is already being generated")
            self._state["is_generating"] = True

        self.release_current_video()
        self._update(
            is_generating=True,
            status="Starting...",
            progress=0,
            video_url=None,
            error=None,
            error_kind=None
        )
        return self.state

    async def run(self, request: GenerationRequest):
        """Run the orchestrator in a worker thread and record the outcome"""
        try:
            video = await asyncio.to_thread(
                generate_cinematic_video,
                request.image,
                request.mood,
                self._on_progress,
                generator=self.generator,
                store=self.store,
                **self.monitor_options
            )
        except CredentialExpiredError as e:
            self.key_provider.clear_key()
            self._update(is_generating=False, error=e.message, error_kind=e.kind)
        except GenerationError as e:
            self._update(is_generating=False, error=e.message, error_kind=e.kind)
        except Exception as e:
            logger.error(f"[API] Unexpected generation failure: {str(e)}", exc_info=True)
            self._update(
                is_generating=False,
                error=str(e) or GenerationError.default_message,
                error_kind=GenerationError.kind
            )
        else:
            self.current_video = video
            self._update(
                is_generating=False,
                status="Completed",
                progress=100,
                video_url=video.url,
                error=None,
                error_kind=None
            )

    def close(self):
        self.store.close()
