"""
Google Veo video generation using google-genai SDK (Gemini API key auth)
"""

import logging
from io import BytesIO
from typing import Optional

import requests
from google import genai
from google.genai import types
from google.genai.types import GenerateVideosConfig, Image

from ...core.credentials import ApiKeyProvider
from ...core.errors import GenerationError
from ...core.state import ImagePayload

logger = logging.getLogger(__name__)


class GoogleVeoGenerator:
    """Google Veo image-to-video generation via the Gemini API"""

    def __init__(self, key_provider: ApiKeyProvider, model: str = None, config: dict = None):
        from ...core.config import GOOGLE_VEO_CONFIG
        self.key_provider = key_provider
        self.config = {**GOOGLE_VEO_CONFIG, **(config or {})}
        self.model = model or self.config["default_model"]
        self._client = None
        self._client_key = None

    @property
    def client(self):
        """Lazy client initialization, rebuilt when the selected key changes"""
        api_key = self.key_provider.get_api_key()
        if self._client is None or self._client_key != api_key:
            self._client = genai.Client(api_key=api_key)
            self._client_key = api_key
        return self._client

    def build_config(self) -> GenerateVideosConfig:
        return GenerateVideosConfig(
            number_of_videos=self.config["number_of_videos"],
            resolution=self.config["resolution"],
            aspect_ratio=self.config["aspect_ratio"]
        )

    def submit(self, prompt: str, image: ImagePayload) -> types.GenerateVideosOperation:
        """
        Submit an image-to-video generation request

        Args:
            prompt: Full composed instruction
            image: Source image bytes and mime type

        Returns:
            Long-running operation (may already be done)
        """
        logger.info(f"[GoogleVeo] Submitting video generation task")
        logger.info(f"[GoogleVeo] Model: {self.model}, Resolution: {self.config['resolution']}, "
                    f"Aspect ratio: {self.config['aspect_ratio']}")
        logger.info(f"[GoogleVeo] Prompt: {prompt[:200]}...")

        operation = self.client.models.generate_videos(
            model=self.model,
            prompt=prompt,
            image=Image(image_bytes=image.data, mime_type=image.mime_type),
            config=self.build_config()
        )

        logger.info(f"[GoogleVeo] Task submitted successfully: {operation.name}")
        return operation

    def refresh(self, operation: types.GenerateVideosOperation) -> types.GenerateVideosOperation:
        """Fetch the current state of an operation"""
        operation = self.client.operations.get(operation)
        if operation.done:
            logger.info(f"[GoogleVeo] Task completed: {operation.name}")
        else:
            logger.info(f"[GoogleVeo] Task still processing: {operation.name}")
        return operation

    def download(self, uri: str) -> bytes:
        """
        Download a generated video

        The URI is not pre-authenticated, so the active key is sent as the
        `key` query parameter.
        """
        api_key = self.key_provider.get_api_key()
        logger.info(f"[GoogleVeo] Downloading video: {uri}")

        # requests error text carries the full URL, key included
        try:
            response = requests.get(
                uri,
                params={"key": api_key},
                stream=True,
                timeout=self.config["download_timeout"]
            )
            response.raise_for_status()

            video_buffer = BytesIO()
            for chunk in response.iter_content(chunk_size=1024*1024):  # 1MB chunks
                video_buffer.write(chunk)
        except requests.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else "error"
            raise GenerationError(f"Video download failed: HTTP {status_code}") from None
        except requests.RequestException as e:
            raise GenerationError(f"Video download failed: {type(e).__name__}") from None

        data = video_buffer.getvalue()
        logger.info(f"[GoogleVeo] Downloaded {len(data)} bytes")
        return data


def extract_video_uri(operation) -> Optional[str]:
    """First generated video URI of a finished operation, if any"""
    # Gemini API populates .response, Vertex populates .result
    response = getattr(operation, "response", None) or getattr(operation, "result", None)
    videos = getattr(response, "generated_videos", None) if response else None
    if not videos:
        return None
    video = getattr(videos[0], "video", None)
    return getattr(video, "uri", None) or None
