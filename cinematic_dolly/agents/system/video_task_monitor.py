"""
Video task monitoring for Cinematic Dolly Studio
Drives one dolly-in generation from submission to a playable video
"""

import time
import logging
from typing import Callable, Optional

from ...core.config import (
    GOOGLE_VEO_CONFIG,
    INITIAL_PROGRESS,
    PROGRESS_STEP,
    PROGRESS_CAP,
    FINALIZING_PROGRESS,
    STATUS_INITIALIZING,
    STATUS_PROCESSING,
    STATUS_FINALIZING,
    VIDEO_MIME_TYPE,
)
from ...core.errors import (
    GenerationError,
    NoOutputError,
    GenerationTimeoutError,
    classify_provider_error,
)
from ...core.state import ImagePayload, ProgressReport
from ...prompts.dolly import compose_prompt
from ...storage.video_store import VideoStore, VideoResource
from ..creative.client_veo_google import extract_video_uri

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int], None]


def polling_progress(poll_count: int) -> int:
    """Progress shown while waiting: +5 per poll from 10, never above 95"""
    return min(INITIAL_PROGRESS + poll_count * PROGRESS_STEP, PROGRESS_CAP)


def generate_cinematic_video(
    image: ImagePayload,
    mood: Optional[str],
    on_progress: Optional[ProgressCallback] = None,
    *,
    generator,
    store: VideoStore,
    poll_interval: Optional[float] = None,
    max_poll_attempts: Optional[int] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> VideoResource:
    """Generate a vertical dolly-in video from one interior photo

    This function:
    1. Composes the dolly prompt from the mood text
    2. Submits one generation job to Veo
    3. Polls every `poll_interval` seconds until the job is done
    4. Downloads the video into `store` and returns its handle

    Args:
        image: Source image
        mood: Optional mood/style text
        on_progress: Called with (message, percent) as the job advances
        generator: Provider adapter exposing submit/refresh/download
        store: Where the downloaded video is kept
        poll_interval: Seconds between polls (default from GOOGLE_VEO_CONFIG)
        max_poll_attempts: Optional poll ceiling, None polls until done
        sleep: Sleep function, replaced in tests

    Returns:
        VideoResource for the downloaded video

    Raises:
        CredentialExpiredError: status poll reported the entity as not found
        NoOutputError: job finished without a retrievable video
        GenerationTimeoutError: max_poll_attempts exceeded
        GenerationError: any other submit/poll/download failure
    """
    if image is None:
        raise ValueError("An image is required to generate a video")

    if poll_interval is None:
        poll_interval = GOOGLE_VEO_CONFIG["check_interval"]
    if max_poll_attempts is None:
        max_poll_attempts = GOOGLE_VEO_CONFIG["max_poll_attempts"]

    def report(message: str, percent: int):
        progress_report = ProgressReport(message=message, percent=percent)
        logger.info(f"[DollyMonitor] {progress_report.percent}% - {progress_report.message}")
        if on_progress:
            on_progress(progress_report.message, progress_report.percent)

    start_time = time.time()
    prompt = compose_prompt(mood)

    try:
        report(STATUS_INITIALIZING, INITIAL_PROGRESS)

        try:
            operation = generator.submit(prompt, image)
        except Exception as e:
            raise classify_provider_error(e) from e

        poll_count = 0
        while not operation.done:
            if max_poll_attempts is not None and poll_count >= max_poll_attempts:
                raise GenerationTimeoutError(
                    f"Video generation timed out after {poll_count} status checks"
                )

            poll_count += 1
            elapsed = int(poll_count * poll_interval)
            report(STATUS_PROCESSING.format(elapsed=elapsed), polling_progress(poll_count))

            sleep(poll_interval)

            try:
                operation = generator.refresh(operation)
            except Exception as e:
                raise classify_provider_error(e, poll=True) from e

        report(STATUS_FINALIZING, FINALIZING_PROGRESS)

        if getattr(operation, "error", None):
            error = operation.error
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise GenerationError(message or None)

        video_uri = extract_video_uri(operation)
        if not video_uri:
            raise NoOutputError()

        try:
            video_bytes = generator.download(video_uri)
        except Exception as e:
            raise classify_provider_error(e) from e
        if not video_bytes:
            raise NoOutputError()

        resource = store.add(video_bytes, mime_type=VIDEO_MIME_TYPE)

    except GenerationError as e:
        logger.error(f"[DollyMonitor] Video generation error ({e.kind}): {e.message}")
        raise
    except Exception as e:
        error = classify_provider_error(e)
        logger.error(f"[DollyMonitor] Video generation error ({error.kind}): {error.message}", exc_info=True)
        raise error from e

    total_time = time.time() - start_time
    logger.info(f"[DollyMonitor] Video ready after {poll_count} polls ({total_time:.1f}s): {resource.url}")
    return resource
