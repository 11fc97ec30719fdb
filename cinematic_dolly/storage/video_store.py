"""
Local storage for generated videos

Downloaded videos are written to a private directory and handed out as
VideoResource handles. Handles are a finite resource: the presentation layer
releases them once the video is no longer displayed.
"""

import os
import uuid
import shutil
import logging
import tempfile
import threading
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class VideoResource:
    """Handle to one locally stored video"""

    def __init__(self, store: "VideoStore", resource_id: str, path: Path, mime_type: str, size: int):
        self.store = store
        self.resource_id = resource_id
        self.path = path
        self.mime_type = mime_type
        self.size = size

    @property
    def url(self) -> str:
        return f"/videos/{self.resource_id}"

    @property
    def released(self) -> bool:
        return self.store.get(self.resource_id) is None

    def read_bytes(self) -> bytes:
        if self.released:
            raise FileNotFoundError(f"Video {self.resource_id} has been released")
        return self.path.read_bytes()

    def release(self) -> bool:
        return self.store.release(self.resource_id)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
        return False

    def __repr__(self):
        return f"VideoResource(id={self.resource_id!r}, size={self.size}, mime_type={self.mime_type!r})"


class VideoStore:
    """Registry of downloaded videos backed by files on disk"""

    def __init__(self, base_dir: Optional[str] = None):
        if base_dir:
            os.makedirs(base_dir, exist_ok=True)
        self.base_dir = Path(tempfile.mkdtemp(prefix="videos_", dir=base_dir))
        self._resources: Dict[str, VideoResource] = {}
        self._lock = threading.Lock()

    def add(self, data: bytes, mime_type: str = "video/mp4") -> VideoResource:
        """Write video bytes to disk and register a handle for them"""
        if not data:
            raise ValueError("Cannot store an empty video")

        resource_id = uuid.uuid4().hex
        extension = ".mp4" if mime_type == "video/mp4" else ""
        path = self.base_dir / f"{resource_id}{extension}"
        path.write_bytes(data)

        resource = VideoResource(self, resource_id, path, mime_type, len(data))
        with self._lock:
            self._resources[resource_id] = resource
        logger.info(f"[VideoStore] Stored video {resource_id} ({len(data)} bytes)")
        return resource

    def get(self, resource_id: str) -> Optional[VideoResource]:
        with self._lock:
            return self._resources.get(resource_id)

    def release(self, resource_id: str) -> bool:
        """Delete a stored video; returns False if it was already gone"""
        with self._lock:
            resource = self._resources.pop(resource_id, None)
        if resource is None:
            return False
        try:
            resource.path.unlink()
        except FileNotFoundError:
            pass
        logger.info(f"[VideoStore] Released video {resource_id}")
        return True

    def __len__(self):
        with self._lock:
            return len(self._resources)

    def close(self) -> None:
        """Release every handle and remove the storage directory"""
        with self._lock:
            resource_ids = list(self._resources)
        for resource_id in resource_ids:
            self.release(resource_id)
        shutil.rmtree(self.base_dir, ignore_errors=True)
