"""
Deepgram speech-to-text adapter.

Posts raw bytes (or a URL) to Deepgram's /listen endpoint and turns the word
timings into transcript chunks, either fixed windows of `chunk_duration`
seconds or pause-based (a silence longer than PAUSE_THRESHOLD closes a chunk,
still capped at `chunk_duration`).
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Union

import requests

from one_take_studio import config
from one_take_studio.domain.errors import TranscriptionError
from one_take_studio.domain.models import Chunk, StructuredTranscript
from one_take_studio.ports.interfaces import ISpeechToText

logger = logging.getLogger(__name__)

Word = Dict[str, Any]


def _word_text(word: Word) -> str:
    return word.get("punctuated_word") or word.get("word") or ""


def _chunk_words(words: List[Word], closes_chunk: Callable[[Word, Word, Word], bool]) -> List[Chunk]:
    """
    Group consecutive words into chunks.
    closes_chunk(first, previous, current) says whether `current` starts a new chunk.
    """
    chunks: List[Chunk] = []
    current: List[Word] = []
    for word in words:
        if current and closes_chunk(current[0], current[-1], word):
            chunks.append(_make_chunk(current))
            current = []
        current.append(word)
    if current:
        chunks.append(_make_chunk(current))
    return chunks


def _make_chunk(words: List[Word]) -> Chunk:
    return {
        "start": float(words[0].get("start", 0)),
        "end": float(words[-1].get("end", 0)),
        "text": " ".join(t for t in (_word_text(w) for w in words) if t),
    }


def chunk_by_duration(words: List[Word], chunk_duration: float) -> List[Chunk]:
    """Fixed windows: a chunk spans at most `chunk_duration` seconds from its first word."""
    return _chunk_words(
        words,
        lambda first, _prev, word: word.get("start", 0) - first.get("start", 0) >= chunk_duration,
    )


def chunk_by_pauses(words: List[Word], pause_threshold: float, max_duration: float) -> List[Chunk]:
    """Split at silences longer than `pause_threshold`, and whenever a chunk reaches `max_duration`."""
    return _chunk_words(
        words,
        lambda first, prev, word: (
            word.get("start", 0) - prev.get("end", 0) > pause_threshold
            or word.get("start", 0) - first.get("start", 0) >= max_duration
        ),
    )


def build_transcript(
    payload: Dict[str, Any],
    *,
    chunk_duration: int,
    use_pause_based_chunking: bool,
    pause_threshold: float,
    model: str,
) -> StructuredTranscript:
    """Deepgram /listen response -> StructuredTranscript."""
    results = payload.get("results") or {}
    channels = results.get("channels") or [{}]
    alternatives = channels[0].get("alternatives") or [{}]
    words: List[Word] = alternatives[0].get("words") or []

    if use_pause_based_chunking:
        chunks = chunk_by_pauses(words, pause_threshold, chunk_duration)
    else:
        chunks = chunk_by_duration(words, chunk_duration)

    dg_metadata = payload.get("metadata") or {}
    duration = dg_metadata.get("duration")
    if not isinstance(duration, (int, float)):
        duration = chunks[-1]["end"] if chunks else 0.0

    return {
        "transcript": chunks,
        "metadata": {
            "duration": float(duration),
            "chunkCount": len(chunks),
            "chunkDuration": chunk_duration,
            "usePauseBasedChunking": use_pause_based_chunking,
            "model": model,
            "requestId": dg_metadata.get("request_id", ""),
        },
    }


class DeepgramSpeechToText(ISpeechToText):
    """ISpeechToText over Deepgram's pre-recorded audio REST API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        pause_threshold: Optional[float] = None,
        timeout: Optional[int] = None,
    ):
        self.api_key = api_key if api_key is not None else config.DEEPGRAM_API_KEY
        self.model = model or config.DEEPGRAM_MODEL
        self.base_url = base_url or config.DEEPGRAM_BASE_URL
        self.pause_threshold = pause_threshold if pause_threshold is not None else config.PAUSE_THRESHOLD
        self.timeout = timeout or config.STT_TIMEOUT

    def transcribe(
        self,
        source: Union[bytes, str],
        *,
        chunk_duration: int = 30,
        use_pause_based_chunking: bool = False,
        use_smart_format: bool = True,
        model: str = "",
        mimetype: str = "",
    ) -> StructuredTranscript:
        if not self.api_key:
            raise TranscriptionError("DEEPGRAM_API_KEY is not set")
        if chunk_duration <= 0:
            chunk_duration = config.DEFAULT_CHUNK_DURATION

        model = model or self.model
        params = {
            "model": model,
            "smart_format": "true" if use_smart_format else "false",
            "punctuate": "true",
        }
        headers = {"Authorization": f"Token {self.api_key}"}
        if isinstance(source, (bytes, bytearray)):
            headers["Content-Type"] = mimetype or "application/octet-stream"
            body = {"data": bytes(source)}
            logger.info("Transcribing %d bytes (%s) with %s", len(source), headers["Content-Type"], model)
        else:
            body = {"json": {"url": source}}
            logger.info("Transcribing %s with %s", source, model)

        try:
            response = requests.post(
                f"{self.base_url}/listen",
                params=params,
                headers=headers,
                timeout=self.timeout,
                **body,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            raise TranscriptionError(f"Deepgram request failed: {exc}") from exc
        except ValueError as exc:
            raise TranscriptionError("Deepgram returned a non-JSON response") from exc

        transcript = build_transcript(
            payload,
            chunk_duration=chunk_duration,
            use_pause_based_chunking=use_pause_based_chunking,
            pause_threshold=self.pause_threshold,
            model=model,
        )
        logger.info(
            "Transcription complete: %d chunks, %.1fs",
            transcript["metadata"]["chunkCount"],
            transcript["metadata"]["duration"],
        )
        return transcript
