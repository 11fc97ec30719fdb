"""Creative content generation clients"""

# Import clients
from .client_veo_google import GoogleVeoGenerator, extract_video_uri

# Import utilities
from .util_image import image_payload_from_upload, image_payload_from_file, image_payload_from_base64

__all__ = [
    # Clients
    'GoogleVeoGenerator',
    'extract_video_uri',
    # Utilities
    'image_payload_from_upload',
    'image_payload_from_file',
    'image_payload_from_base64',
]
