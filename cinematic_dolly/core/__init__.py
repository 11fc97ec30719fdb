"""Core system components"""

from .state import GenerationState, GenerationRequest, ImagePayload, ProgressReport, idle_state
from .errors import (
    GenerationError,
    CredentialExpiredError,
    NoOutputError,
    GenerationTimeoutError,
    MissingApiKeyError,
    classify_provider_error,
)
from .credentials import ApiKeyProvider

__all__ = [
    'GenerationState',
    'GenerationRequest',
    'ImagePayload',
    'ProgressReport',
    'idle_state',
    'GenerationError',
    'CredentialExpiredError',
    'NoOutputError',
    'GenerationTimeoutError',
    'MissingApiKeyError',
    'classify_provider_error',
    'ApiKeyProvider',
]
