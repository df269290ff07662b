"""Domain models – plain dicts on the wire, described here as TypedDicts.

Keys match what the calendar UI consumes (camelCase where it expects it).
"""

from typing import Any, Dict, List, TypedDict


class Chunk(TypedDict):
    """A contiguous transcript segment (seconds)."""
    start: float
    end: float
    text: str


class TranscriptMetadata(TypedDict, total=False):
    duration: float
    chunkCount: int
    chunkDuration: int
    usePauseBasedChunking: bool
    model: str
    requestId: str


class StructuredTranscript(TypedDict, total=False):
    """Time-aligned transcript as returned by the speech-to-text adapter."""
    transcript: List[Chunk]
    metadata: TranscriptMetadata


class SpicyMoment(TypedDict, total=False):
    timestamp: str  # "M:SS" or "MM:SS"
    quote: str
    reason: str


class AnalysisResult(TypedDict):
    title: str
    duration: str
    topics: List[str]
    spicyMoments: List[SpicyMoment]


class TikTokScript(TypedDict):
    id: str
    type: str  # 'tiktok'
    title: str
    hook: str
    content: str
    day: int
    time: str
    tags: List[str]


class TwitterThread(TypedDict):
    id: str
    type: str  # 'twitter'
    title: str
    template: str
    content: str
    day: int
    time: str
    tags: List[str]


class LinkedInPost(TypedDict):
    id: str
    type: str  # 'linkedin'
    title: str
    content: str
    shareUrl: str
    day: int
    time: str
    tags: List[str]


class Newsletter(TypedDict):
    id: str
    type: str  # 'newsletter'
    title: str
    content: str
    day: int
    time: str
    tags: List[str]


class GeneratedContent(TypedDict):
    tiktok: List[TikTokScript]
    twitter: List[TwitterThread]
    linkedin: List[LinkedInPost]
    newsletter: List[Newsletter]


class StudioResult(TypedDict):
    """Response object handed to the presentation layer."""
    transcript: StructuredTranscript
    analysis: Any  # AnalysisResult or None
    generatedContent: GeneratedContent


def empty_generated_content() -> GeneratedContent:
    return {"tiktok": [], "twitter": [], "linkedin": [], "newsletter": []}


def transcript_duration(transcript: StructuredTranscript) -> float:
    """Total duration in seconds: metadata first, then the last chunk end, else 0."""
    metadata: Dict[str, Any] = transcript.get("metadata") or {}
    duration = metadata.get("duration")
    if isinstance(duration, (int, float)) and not isinstance(duration, bool):
        return float(duration)
    ends = [c.get("end", 0) for c in transcript.get("transcript") or []]
    ends = [e for e in ends if isinstance(e, (int, float))]
    return float(max(ends)) if ends else 0.0
