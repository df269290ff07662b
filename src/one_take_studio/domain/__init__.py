"""Domain models and value objects."""

from one_take_studio.domain.errors import (
    CompletionError,
    EmailDeliveryError,
    StudioError,
    TranscriptionError,
)
from one_take_studio.domain.models import (
    AnalysisResult,
    Chunk,
    LinkedInPost,
    Newsletter,
    SpicyMoment,
    StructuredTranscript,
    StudioResult,
    TikTokScript,
    TwitterThread,
)

__all__ = [
    "AnalysisResult",
    "Chunk",
    "CompletionError",
    "EmailDeliveryError",
    "LinkedInPost",
    "Newsletter",
    "SpicyMoment",
    "StructuredTranscript",
    "StudioError",
    "StudioResult",
    "TikTokScript",
    "TranscriptionError",
    "TwitterThread",
]
