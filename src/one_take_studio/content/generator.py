"""
Content generator: analysis pass plus the four content passes.

Every pass is the same pipeline,
    prompt -> completion transport -> JSON candidate -> repair -> normalize
and every pass swallows its own failure: the analysis degrades to None (or
default values), a content pass degrades to an empty list. Nothing raised in
one pass can reach another.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from one_take_studio import config
from one_take_studio.content.extraction import extract_json_candidate
from one_take_studio.content.normalize import (
    CONTENT_TYPES,
    default_analysis,
    normalize_analysis,
    normalize_artifacts,
)
from one_take_studio.content.prompts import (
    PROMPT_BUILDERS,
    SYSTEM_INSTRUCTIONS,
    build_analysis_prompt,
)
from one_take_studio.content.repair import repair_and_parse
from one_take_studio.domain.models import (
    AnalysisResult,
    LinkedInPost,
    Newsletter,
    StructuredTranscript,
    TikTokScript,
    TwitterThread,
    transcript_duration,
)
from one_take_studio.ports.interfaces import ICompletionTransport

logger = logging.getLogger(__name__)

RESPONSE_SAMPLE_CHARS = 500


@dataclass(frozen=True)
class GenerationSettings:
    temperature: float
    max_tokens: int


GENERATION_SETTINGS: Dict[str, GenerationSettings] = {
    "analysis": GenerationSettings(temperature=0.7, max_tokens=2000),
    "tiktok": GenerationSettings(temperature=0.8, max_tokens=4000),
    "twitter": GenerationSettings(temperature=0.7, max_tokens=2500),
    "linkedin": GenerationSettings(temperature=0.7, max_tokens=2500),
    "newsletter": GenerationSettings(temperature=0.7, max_tokens=4000),
}


def parse_analysis(response_content: str, duration_seconds: float = 0) -> AnalysisResult:
    """Raw analysis completion -> AnalysisResult (defaults when nothing parses)."""
    outcome = repair_and_parse(extract_json_candidate(response_content))
    if not outcome.ok:
        logger.error("Could not parse analysis response")
        logger.debug("Response content: %s", response_content[:RESPONSE_SAMPLE_CHARS * 2])
        return default_analysis(duration_seconds)
    return normalize_analysis(outcome.value, duration_seconds)


def parse_artifacts(content_type: str, response_content: str) -> List[Dict[str, Any]]:
    """Raw completion -> normalized artifacts of one type ([] when nothing parses)."""
    ctype = CONTENT_TYPES[content_type]
    outcome = repair_and_parse(extract_json_candidate(response_content), array_key=ctype.array_key)
    if not outcome.ok:
        logger.error("All repair stages failed for %s response", content_type)
        logger.debug("Failed response: %s", response_content[:RESPONSE_SAMPLE_CHARS * 4])
        return []

    records = outcome.value.get(ctype.array_key) if isinstance(outcome.value, dict) else None
    artifacts = normalize_artifacts(content_type, records)
    logger.info("Parsed %d %s item(s) (stage: %s)", len(artifacts), content_type, outcome.stage)
    if not artifacts:
        logger.warning("No %s items in the response", content_type)
        logger.debug("Raw response sample: %s", response_content[:RESPONSE_SAMPLE_CHARS * 2])
    return artifacts


class ContentGenerator:
    """Uses an LLM (through ICompletionTransport) to analyze transcripts and write content."""

    def __init__(self, transport: ICompletionTransport, model: Optional[str] = None):
        self._transport = transport
        self.model = model if model is not None else config.GROQ_MODEL

    async def _complete(self, kind: str, prompt: str) -> str:
        settings = GENERATION_SETTINGS[kind]
        # The transport blocks on HTTP, keep it off the event loop
        response = await asyncio.to_thread(
            self._transport.complete,
            system_instruction=SYSTEM_INSTRUCTIONS[kind],
            user_prompt=prompt,
            model=self.model,
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
        )
        return response or "{}"

    async def analyze_transcript(self, transcript: StructuredTranscript) -> Optional[AnalysisResult]:
        """
        Extract title, topics and spicy moments.

        Returns None when the completion itself failed (the caller then skips
        content generation); an unparseable answer gives default values.
        """
        duration = transcript_duration(transcript)
        logger.info("Analyzing transcript...")
        try:
            response_content = await self._complete("analysis", build_analysis_prompt(transcript))
            analysis = parse_analysis(response_content, duration)
        except Exception:
            logger.exception("Error analyzing transcript")
            return None
        logger.info("Analysis complete: %s", analysis["title"])
        return analysis

    async def generate(
        self,
        content_type: str,
        transcript: StructuredTranscript,
        analysis: AnalysisResult,
    ) -> List[Dict[str, Any]]:
        """One content pass; any failure yields []."""
        logger.info("Generating %s content...", content_type)
        try:
            prompt = PROMPT_BUILDERS[content_type](transcript, analysis)
            response_content = await self._complete(content_type, prompt)
            logger.debug("Raw %s response: %s", content_type, response_content[:RESPONSE_SAMPLE_CHARS])
            return parse_artifacts(content_type, response_content)
        except Exception:
            logger.exception("Error generating %s content", content_type)
            return []

    async def generate_tiktok_scripts(
        self, transcript: StructuredTranscript, analysis: AnalysisResult
    ) -> List[TikTokScript]:
        return await self.generate("tiktok", transcript, analysis)

    async def generate_twitter_threads(
        self, transcript: StructuredTranscript, analysis: AnalysisResult
    ) -> List[TwitterThread]:
        return await self.generate("twitter", transcript, analysis)

    async def generate_linkedin_posts(
        self, transcript: StructuredTranscript, analysis: AnalysisResult
    ) -> List[LinkedInPost]:
        return await self.generate("linkedin", transcript, analysis)

    async def generate_newsletter(
        self, transcript: StructuredTranscript, analysis: AnalysisResult
    ) -> List[Newsletter]:
        return await self.generate("newsletter", transcript, analysis)
