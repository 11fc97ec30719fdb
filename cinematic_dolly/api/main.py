"""Main FastAPI application with WebSocket progress streaming"""

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, WebSocket, WebSocketDisconnect, File, Form, UploadFile, Request, Depends, BackgroundTasks
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, FileResponse

from .api_types import (
    GenerationStateResponse,
    ApiKeyStatusResponse,
    SelectApiKeyRequest,
    KeySelectorResponse,
    ErrorResponse,
)
from .generation_session import GenerationSession, GenerationInProgressError
from ..core.config import VIDEO_STORE_DIR
from ..core.credentials import ApiKeyProvider
from ..core.state import GenerationRequest
from ..agents.creative.client_veo_google import GoogleVeoGenerator
from ..agents.creative.util_image import image_payload_from_upload
from ..storage.video_store import VideoStore

logger = logging.getLogger(__name__)

# How often the WebSocket checks for state changes
WEBSOCKET_POLL_SECONDS = 0.5


def build_session() -> GenerationSession:
    """Wire the production collaborators from environment configuration"""
    key_provider = ApiKeyProvider.from_env()
    return GenerationSession(
        key_provider=key_provider,
        generator=GoogleVeoGenerator(key_provider),
        store=VideoStore(VIDEO_STORE_DIR)
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan"""
    # Startup
    app.state.session = build_session()
    logger.info("[API] Generation session ready")

    yield

    # Shutdown - release every downloaded video
    app.state.session.close()


# Initialize FastAPI app
app = FastAPI(
    title="Cinematic Dolly Studio",
    description="Turn one interior photo into a vertical cinematic dolly-in video",
    version="1.0.0",
    lifespan=lifespan
)

# CORS configuration for client applications
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure with actual client domains in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_session(request: Request) -> GenerationSession:
    return request.app.state.session


def get_ws_session(websocket: WebSocket) -> GenerationSession:
    return websocket.app.state.session


def error_response(status_code: int, error: str, details: Optional[str] = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "name": "Cinematic Dolly Studio",
        "version": "1.0.0",
        "status": "running"
    }


@app.get("/health")
async def health(session: GenerationSession = Depends(get_session)):
    """Health check endpoint"""
    return {
        "status": "healthy",
        "has_selected_key": session.key_provider.has_selected_key(),
        "is_generating": session.state["is_generating"],
        "timestamp": datetime.now().isoformat()
    }


@app.get("/api-key", response_model=ApiKeyStatusResponse)
async def api_key_status(session: GenerationSession = Depends(get_session)):
    return ApiKeyStatusResponse(has_selected_key=session.key_provider.has_selected_key())


@app.post("/api-key", response_model=ApiKeyStatusResponse)
async def select_api_key(request: SelectApiKeyRequest, session: GenerationSession = Depends(get_session)):
    """Select the API key used for generation and download"""
    try:
        session.key_provider.select_key(request.api_key)
    except ValueError as e:
        return error_response(400, "Invalid API key", str(e))
    return ApiKeyStatusResponse(has_selected_key=True)


@app.delete("/api-key", response_model=ApiKeyStatusResponse)
async def change_api_key(session: GenerationSession = Depends(get_session)):
    """Forget the selected key so the user picks a new one"""
    session.key_provider.clear_key()
    return ApiKeyStatusResponse(has_selected_key=False)


@app.post("/api-key/selector", response_model=KeySelectorResponse)
async def open_key_selector(session: GenerationSession = Depends(get_session)):
    """Ask the host environment to show its key selector"""
    notice = session.key_provider.open_key_selector()
    if notice is not None:
        return JSONResponse(
            status_code=501,
            content=KeySelectorResponse(opened=False, message=notice).model_dump()
        )
    return KeySelectorResponse(opened=True)


@app.post("/generations", response_model=GenerationStateResponse, status_code=202)
async def start_generation(
    background_tasks: BackgroundTasks,
    image: UploadFile = File(...),
    mood: str = Form(""),
    session: GenerationSession = Depends(get_session)
):
    """
    Upload an interior photo and start generating the dolly-in video

    Args:
        image: Interior photo (image/*)
        mood: Optional mood/style description

    Returns:
        Initial generation state; follow progress on GET /generation or /ws/generation
    """
    if not session.key_provider.has_selected_key():
        return error_response(401, "No API key selected", "Select an API key before generating")

    try:
        payload = image_payload_from_upload(await image.read(), image.content_type, image.filename)
    except ValueError as e:
        return error_response(400, "Invalid image", str(e))

    try:
        state = session.begin()
    except GenerationInProgressError as e:
        return error_response(409, "Generation in progress", str(e))

    logger.info(f"[API] Starting generation for {image.filename} ({payload.mime_type})")
    background_tasks.add_task(session.run, GenerationRequest(image=payload, mood=mood))
    return GenerationStateResponse(**state)


@app.get("/generation", response_model=GenerationStateResponse)
async def get_generation(session: GenerationSession = Depends(get_session)):
    return GenerationStateResponse(**session.state)


@app.get("/videos/{video_id}")
async def get_video(video_id: str, session: GenerationSession = Depends(get_session)):
    """Serve a generated video for playback or download"""
    video = session.store.get(video_id)
    if video is None:
        return error_response(404, "Video not found", video_id)
    return FileResponse(
        video.path,
        media_type=video.mime_type,
        filename=f"cinematic-dolly-{video_id[:8]}.mp4"
    )


@app.delete("/videos/{video_id}")
async def release_video(video_id: str, session: GenerationSession = Depends(get_session)):
    """Release a video once the client no longer displays it"""
    if session.current_video is not None and session.current_video.resource_id == video_id:
        released = session.release_current_video()
    else:
        released = session.store.release(video_id)
    if not released:
        return error_response(404, "Video not found", video_id)
    return {"video_id": video_id, "released": True}


@app.websocket("/ws/generation")
async def websocket_endpoint(websocket: WebSocket, session: GenerationSession = Depends(get_ws_session)):
    """Stream generation state snapshots until the generation settles"""
    await websocket.accept()
    last_version = None
    try:
        while True:
            version = session.version
            state = session.state
            if version != last_version:
                await websocket.send_json(GenerationStateResponse(**state).model_dump())
                last_version = version
            if not state["is_generating"]:
                break
            await asyncio.sleep(WEBSOCKET_POLL_SECONDS)
    except WebSocketDisconnect:
        logger.info("[API] WebSocket client disconnected")
        return
    await websocket.close()
