"""
Image utility functions for video generation workflow

Turns uploads and local files into ImagePayload values for the Veo API
"""

import base64
import logging
import mimetypes
from pathlib import Path
from typing import Optional

from ...core.state import ImagePayload

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_MIME_TYPE = "image/png"


def _resolve_mime_type(mime_type: Optional[str], filename: Optional[str] = None) -> str:
    """Declared mime type, else guessed from the filename, else PNG"""
    if not mime_type and filename:
        mime_type, _ = mimetypes.guess_type(filename)
    mime_type = (mime_type or DEFAULT_IMAGE_MIME_TYPE).lower()
    if not mime_type.startswith("image/"):
        raise ValueError(f"Unsupported file type '{mime_type}' - please upload an image")
    return mime_type


def image_payload_from_upload(data: bytes, mime_type: Optional[str] = None,
                              filename: Optional[str] = None) -> ImagePayload:
    """
    Build an ImagePayload from uploaded bytes

    Args:
        data: Raw image bytes
        mime_type: Content type declared by the client
        filename: Original filename, used when no content type was sent

    Returns:
        ImagePayload
    """
    if not data:
        raise ValueError("Uploaded image is empty")
    payload = ImagePayload(data=data, mime_type=_resolve_mime_type(mime_type, filename))
    logger.info(f"Image captured ({payload.mime_type}, {len(data)} bytes)")
    return payload


def image_payload_from_file(path: str) -> ImagePayload:
    """Read a local image file into an ImagePayload"""
    file_path = Path(path)
    with open(file_path, "rb") as image_file:
        data = image_file.read()
    return image_payload_from_upload(data, filename=file_path.name)


def image_payload_from_base64(base64_string: str, mime_type: str) -> ImagePayload:
    """Decode a base64 image (with or without a data: URL prefix)"""
    if base64_string.startswith("data:") and "," in base64_string:
        header, base64_string = base64_string.split(",", 1)
        mime_type = mime_type or header[5:].split(";")[0]
    return image_payload_from_upload(base64.b64decode(base64_string), mime_type)
