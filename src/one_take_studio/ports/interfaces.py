"""
Port interfaces (SOLID – Dependency Inversion).
Implement these in adapters; the content core and the pipeline depend only on these abstractions.
A different LLM vendor implements ICompletionTransport, a different STT vendor ISpeechToText.
"""

from abc import ABC, abstractmethod
from typing import List, Union

from one_take_studio.domain.models import StructuredTranscript


class ISpeechToText(ABC):
    """Speech-to-text: audio/video bytes or a URL in, time-stamped chunks out."""

    @abstractmethod
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
        """Transcribe raw bytes or a URL; raise TranscriptionError on failure."""
        pass


class ICompletionTransport(ABC):
    """LLM completion: one prompt in, one raw text completion out."""

    @abstractmethod
    def complete(
        self,
        *,
        system_instruction: str,
        user_prompt: str,
        model: str = "",
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ) -> str:
        """Return the raw completion text; raise CompletionError on failure."""
        pass


class IEmailSender(ABC):
    """Outbound email (newsletter delivery)."""

    @abstractmethod
    def send(
        self,
        *,
        to: List[str],
        subject: str,
        text_body: str,
        html_body: str,
    ) -> str:
        """Send one email; return the message id or raise EmailDeliveryError."""
        pass

    def is_configured(self) -> bool:
        return True
