"""Local storage for generated videos"""

from .video_store import VideoStore, VideoResource

__all__ = [
    'VideoStore',
    'VideoResource'
]
