"""Cinematic Dolly Studio - interior photo to vertical dolly-in video"""

__version__ = "1.0.0"
