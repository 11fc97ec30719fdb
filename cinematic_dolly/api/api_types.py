"""Type definitions for API request/response validation"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class GenerationStateResponse(BaseModel):
    """Current state of the generation session"""
    is_generating: bool
    status: str
    progress: int = Field(ge=0, le=100)
    video_url: Optional[str] = None
    error: Optional[str] = None
    error_kind: Optional[str] = None


class ApiKeyStatusResponse(BaseModel):
    has_selected_key: bool


class SelectApiKeyRequest(BaseModel):
    """Request type for selecting an API key"""
    api_key: str = Field(min_length=1)


class KeySelectorResponse(BaseModel):
    """Result of asking the host to open its key selector"""
    opened: bool
    message: Optional[str] = None


class ErrorResponse(BaseModel):
    """Type for error responses"""
    error: str
    details: Optional[str] = None
    timestamp: datetime = Field(default_factory=datetime.now)
