"""
Studio pipeline – single responsibility: orchestrate transcribe → analyze → {tiktok, twitter, linkedin, newsletter}.
Depends only on port interfaces (SOLID – Dependency Inversion).
"""

import asyncio
import logging
from typing import Optional, Union

from one_take_studio import config
from one_take_studio.content.generator import ContentGenerator
from one_take_studio.domain.models import (
    StructuredTranscript,
    StudioResult,
    empty_generated_content,
)
from one_take_studio.ports.interfaces import ICompletionTransport, ISpeechToText

logger = logging.getLogger(__name__)


class StudioPipeline:
    """
    Orchestrates one recording into a week of content.
    All dependencies are injected; no concrete adapters here.
    """

    def __init__(
        self,
        *,
        speech_to_text: ISpeechToText,
        content_generator: ContentGenerator,
    ):
        self._stt = speech_to_text
        self._content = content_generator

    @classmethod
    def from_adapters(
        cls,
        *,
        speech_to_text: ISpeechToText,
        transport: ICompletionTransport,
        model: Optional[str] = None,
        **_unused,
    ) -> "StudioPipeline":
        """Build from the default_adapters() dict; adapters the pipeline does not use (email_sender) are ignored."""
        return cls(
            speech_to_text=speech_to_text,
            content_generator=ContentGenerator(transport, model=model),
        )

    async def _transcribe(
        self,
        source: Union[bytes, str],
        *,
        mimetype: str = "",
        chunk_duration: int = config.DEFAULT_CHUNK_DURATION,
        use_pause_based_chunking: bool = False,
    ) -> StructuredTranscript:
        # Errors propagate: without a transcript there is nothing to generate
        return await asyncio.to_thread(
            self._stt.transcribe,
            source,
            chunk_duration=chunk_duration,
            use_pause_based_chunking=use_pause_based_chunking,
            mimetype=mimetype,
        )

    async def generate_content(self, transcript: StructuredTranscript) -> StudioResult:
        """Analyze, then run the four generators concurrently. Never raises."""
        generated = empty_generated_content()
        analysis = await self._content.analyze_transcript(transcript)
        if analysis is None:
            logger.warning("Analysis failed, skipping content generation")
            return {"transcript": transcript, "analysis": None, "generatedContent": generated}

        branches = {
            "tiktok": self._content.generate_tiktok_scripts(transcript, analysis),
            "twitter": self._content.generate_twitter_threads(transcript, analysis),
            "linkedin": self._content.generate_linkedin_posts(transcript, analysis),
            "newsletter": self._content.generate_newsletter(transcript, analysis),
        }
        results = await asyncio.gather(*branches.values(), return_exceptions=True)

        for content_type, result in zip(branches, results):
            if isinstance(result, BaseException):
                logger.error("%s generation failed: %r", content_type, result)
                continue
            generated[content_type] = result

        logger.info(
            "Content generation complete: %s",
            ", ".join(f"{len(items)} {name}" for name, items in generated.items()),
        )
        return {"transcript": transcript, "analysis": analysis, "generatedContent": generated}

    async def process_file(
        self,
        data: bytes,
        mimetype: str,
        *,
        chunk_duration: int = config.DEFAULT_CHUNK_DURATION,
        use_pause_based_chunking: bool = False,
    ) -> StudioResult:
        """Uploaded audio/video bytes -> transcript, analysis and generated content."""
        transcript = await self._transcribe(
            data,
            mimetype=mimetype,
            chunk_duration=chunk_duration,
            use_pause_based_chunking=use_pause_based_chunking,
        )
        return await self.generate_content(transcript)

    async def process_url(
        self,
        url: str,
        *,
        chunk_duration: int = config.DEFAULT_CHUNK_DURATION,
        use_pause_based_chunking: bool = False,
    ) -> StudioResult:
        transcript = await self.transcribe_url(
            url,
            chunk_duration=chunk_duration,
            use_pause_based_chunking=use_pause_based_chunking,
        )
        return await self.generate_content(transcript)

    async def transcribe_url(
        self,
        url: str,
        *,
        chunk_duration: int = config.DEFAULT_CHUNK_DURATION,
        use_pause_based_chunking: bool = False,
    ) -> StructuredTranscript:
        return await self._transcribe(
            url,
            chunk_duration=chunk_duration,
            use_pause_based_chunking=use_pause_based_chunking,
        )
