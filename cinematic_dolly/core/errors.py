"""Error taxonomy for video generation

Every failure surfaced by the orchestrator is a GenerationError subclass with a
stable `kind` so the presentation layer can react without parsing messages.
"""

from typing import Optional

from google.genai import errors as genai_errors

# Google returns this text with HTTP 404 NOT_FOUND once the selected key's session is gone
ENTITY_NOT_FOUND_MESSAGE = "Requested entity was not found"


class GenerationError(Exception):
    """Generic/unclassified generation failure"""

    kind = "generation_failed"
    default_message = "An unexpected error occurred."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class CredentialExpiredError(GenerationError):
    """The selected API key no longer resolves the running operation"""

    kind = "api_key_expired"
    default_message = "API Session Expired. Please re-select your key."


class NoOutputError(GenerationError):
    """The operation finished without a retrievable video"""

    kind = "no_output"
    default_message = "Video generation failed - no output received."


class GenerationTimeoutError(GenerationError):
    """Poll ceiling reached before the operation finished"""

    kind = "timeout"
    default_message = "Video generation timed out."


class MissingApiKeyError(GenerationError):
    kind = "api_key_missing"
    default_message = "No API key selected. Please select an API key first."


def is_entity_not_found(exc: BaseException) -> bool:
    """True when a provider error means the operation/entity is gone"""
    if isinstance(exc, genai_errors.APIError):
        if exc.code == 404 or exc.status == "NOT_FOUND":
            return True
    return ENTITY_NOT_FOUND_MESSAGE in str(exc)


def classify_provider_error(exc: BaseException, poll: bool = False) -> GenerationError:
    """Map a raw provider/transport exception to the error taxonomy

    Only a failed status poll (`poll=True`) can mean the key expired; a
    not-found on submit or download stays a generic failure.
    """
    if isinstance(exc, GenerationError):
        return exc
    if poll and is_entity_not_found(exc):
        return CredentialExpiredError()

    message = None
    if isinstance(exc, genai_errors.APIError):
        message = exc.message
    if not message:
        message = str(exc) or None
    return GenerationError(message)
