"""Agent implementations for Cinematic Dolly Studio"""

# Import system agents
from .system.video_task_monitor import generate_cinematic_video

# Import creative clients and utilities
from .creative.client_veo_google import GoogleVeoGenerator, extract_video_uri


__all__ = [
    # System agents
    'generate_cinematic_video',
    # Creative clients
    'GoogleVeoGenerator',
    'extract_video_uri',
]
