"""Configuration and setup for Cinematic Dolly Studio"""

import os
import tempfile
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# API Key Configuration
# GEMINI_API_KEY is preferred, API_KEY kept for AI Studio style environments
GEMINI_API_KEY = os.getenv('GEMINI_API_KEY') or os.getenv('API_KEY', '')

# Key selection is only possible where the host exposes a selector
KEY_SELECTOR_ENABLED = os.getenv('KEY_SELECTOR_ENABLED', 'false').lower() == 'true'
KEY_SELECTOR_UNAVAILABLE_MESSAGE = "API Key selection is only available in the AI Studio environment."


def _optional_int(value):
    """Parse an optional integer env value (empty/None -> None)"""
    if value is None or str(value).strip() == "":
        return None
    return int(value)


# Google Veo Configuration
GOOGLE_VEO_CONFIG = {
    "default_model": os.getenv('VEO_MODEL', 'veo-3.1-fast-generate-preview'),
    "check_interval": 10,  # fixed, no backoff
    "max_poll_attempts": _optional_int(os.getenv('VEO_MAX_POLL_ATTEMPTS')),  # None = poll until done
    "number_of_videos": 1,
    "resolution": "1080p",
    "aspect_ratio": "9:16",
    "download_timeout": 120,  # seconds
}

# Progress reporting
INITIAL_PROGRESS = 10
PROGRESS_STEP = 5
PROGRESS_CAP = 95
FINALIZING_PROGRESS = 98

# Status messages shown to the user
STATUS_INITIALIZING = "Initializing video generation..."
STATUS_PROCESSING = "Processing video frames... ({elapsed}s elapsed)"
STATUS_FINALIZING = "Finalizing video file..."

# Local video storage
VIDEO_STORE_DIR = os.getenv('VIDEO_STORE_DIR', os.path.join(tempfile.gettempdir(), 'cinematic_dolly_videos'))
VIDEO_MIME_TYPE = "video/mp4"
