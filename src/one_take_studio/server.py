"""
One-Take Studio API – HTTP front for the studio pipeline
=========================================================

Launch:
    one-take-studio serve            # via CLI
    uvicorn one_take_studio.server:create_app --factory --port 3001

Endpoints:
    GET  /health                 → liveness
    POST /api/transcribe         → upload audio/video, get transcript + analysis + content
    POST /api/transcribe-url     → transcript of a remote audio/video file
    POST /api/send-newsletter    → email a newsletter
    POST /api/preview            → short voice-playback text of one artifact
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Union

from fastapi import Body, FastAPI, File, Form, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from one_take_studio import __version__, config
from one_take_studio.application.newsletter import send_newsletter
from one_take_studio.application.pipeline import StudioPipeline
from one_take_studio.content.preview import preview_text
from one_take_studio.domain.errors import EmailDeliveryError
from one_take_studio.ports.interfaces import IEmailSender

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────
#  Request Models
# ─────────────────────────────────────────────────────────────

class TranscribeUrlRequest(BaseModel):
    url: Optional[str] = None
    chunkDuration: Optional[int] = None
    usePauseBasedChunking: bool = False


class NewsletterRequest(BaseModel):
    to: Optional[Union[str, List[str]]] = None
    subject: Optional[str] = None
    body: Optional[str] = None


# ─────────────────────────────────────────────────────────────
#  Helpers
# ─────────────────────────────────────────────────────────────

def _success(data: Any) -> Dict[str, Any]:
    return {"success": True, "data": data}


def _error(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "message": message})


def _chunk_duration(value: Any) -> int:
    """Form/JSON chunk duration; anything unusable falls back to the default."""
    try:
        duration = int(value)
    except (TypeError, ValueError):
        return config.DEFAULT_CHUNK_DURATION
    return duration if duration > 0 else config.DEFAULT_CHUNK_DURATION


# ─────────────────────────────────────────────────────────────
#  App Factory
# ─────────────────────────────────────────────────────────────

def create_app(
    pipeline: Optional[StudioPipeline] = None,
    email_sender: Optional[IEmailSender] = None,
) -> FastAPI:
    if pipeline is None or email_sender is None:
        from one_take_studio.adapters import default_adapters

        adapters = default_adapters()
        pipeline = pipeline or StudioPipeline.from_adapters(**adapters)
        email_sender = email_sender or adapters["email_sender"]

    app = FastAPI(title="One-Take Studio API", version=__version__)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health():
        return {"status": "ok", "message": "One-Take Studio API is running"}

    @app.post("/api/transcribe")
    async def transcribe(
        audio: Optional[UploadFile] = File(None),
        chunkDuration: Optional[str] = Form(None),
        usePauseBasedChunking: Optional[str] = Form(None),
    ):
        if audio is None:
            return _error(400, "No file uploaded", "Please upload an audio or video file")

        mimetype = audio.content_type or ""
        if mimetype not in config.ALLOWED_MIME_TYPES:
            return _error(400, "Invalid file type", "Only audio and video files are allowed")

        data = await audio.read()
        if len(data) > config.MAX_UPLOAD_BYTES:
            return _error(
                400,
                "File too large",
                f"File size must be less than {config.MAX_UPLOAD_BYTES // (1024 * 1024)}MB",
            )

        chunk_duration = _chunk_duration(chunkDuration)
        use_pauses = usePauseBasedChunking == "true"
        logger.info(
            "Received file: %s (%.2f MB, %s), chunk duration %ss, pause-based %s",
            audio.filename, len(data) / 1024 / 1024, mimetype, chunk_duration, use_pauses,
        )

        try:
            result = await pipeline.process_file(
                data,
                mimetype,
                chunk_duration=chunk_duration,
                use_pause_based_chunking=use_pauses,
            )
        except Exception as e:
            logger.exception("Error processing transcription")
            return _error(500, "Transcription failed", str(e) or "An unknown error occurred")
        return _success(result)

    @app.post("/api/transcribe-url")
    async def transcribe_url(request: TranscribeUrlRequest):
        if not request.url:
            return _error(400, "No URL provided", "Please provide a URL to an audio or video file")

        logger.info("Transcribing from URL: %s", request.url)
        try:
            transcript = await pipeline.transcribe_url(
                request.url,
                chunk_duration=_chunk_duration(request.chunkDuration),
                use_pause_based_chunking=request.usePauseBasedChunking,
            )
        except Exception as e:
            logger.exception("Error processing URL transcription")
            return _error(500, "Transcription failed", str(e) or "An unknown error occurred")
        return _success(transcript)

    @app.post("/api/send-newsletter")
    async def newsletter(request: NewsletterRequest):
        if not request.to or not request.subject or not request.body:
            return _error(400, "Missing required fields", "Please provide to, subject, and body")

        if not email_sender.is_configured():
            logger.error("RESEND_API_KEY not configured")
            return _error(
                500,
                "Email service not configured",
                "Please configure RESEND_API_KEY in environment variables",
            )

        try:
            message_id = await asyncio.to_thread(
                send_newsletter, email_sender, to=request.to, subject=request.subject, body=request.body
            )
        except EmailDeliveryError as e:
            logger.error("Error sending newsletter: %s", e)
            return _error(500, "Server error", str(e))
        return _success({"messageId": message_id, "message": "Newsletter sent successfully"})

    @app.post("/api/preview")
    async def preview(artifact: Dict[str, Any] = Body(...)):
        return _success({"text": preview_text(artifact)})

    return app
