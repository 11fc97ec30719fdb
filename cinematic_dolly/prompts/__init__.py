"""Prompt templates for video generation"""

from .dolly import (
    DEFAULT_MOOD,
    DOLLY_SYSTEM_CONSTRAINTS,
    DOLLY_VIDEO_PROMPT_TEMPLATE,
    compose_prompt,
    resolve_mood
)

__all__ = [
    'DEFAULT_MOOD',
    'DOLLY_SYSTEM_CONSTRAINTS',
    'DOLLY_VIDEO_PROMPT_TEMPLATE',
    'compose_prompt',
    'resolve_mood'
]
