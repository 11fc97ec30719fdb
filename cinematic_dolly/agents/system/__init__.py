"""System agents for core workflow management"""

from .video_task_monitor import generate_cinematic_video, polling_progress

__all__ = [
    'generate_cinematic_video',
    'polling_progress'
]
