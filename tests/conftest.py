"""Shared fixtures for One-Take Studio tests.

Provides:
- FakeTransport: scripted ICompletionTransport (per system-instruction kind)
- FakeSpeechToText: returns a canned transcript or raises
- FakeEmailSender: records sent messages
- sample transcript / analysis factories
"""

import os
from typing import Any, Dict, List, Optional

import pytest

# Set env vars before any one_take_studio imports so a developer .env cannot leak in
os.environ.setdefault("GROQ_API_KEY", "")
os.environ.setdefault("GEMINI_API_KEY", "")
os.environ.setdefault("DEEPGRAM_API_KEY", "")
os.environ.setdefault("RESEND_API_KEY", "")
os.environ.setdefault("USE_OLLAMA_FALLBACK", "false")

from one_take_studio.content.prompts import SYSTEM_INSTRUCTIONS  # noqa: E402
from one_take_studio.domain.errors import CompletionError, TranscriptionError  # noqa: E402
from one_take_studio.ports.interfaces import (  # noqa: E402
    ICompletionTransport,
    IEmailSender,
    ISpeechToText,
)

_KIND_BY_INSTRUCTION = {instruction: kind for kind, instruction in SYSTEM_INSTRUCTIONS.items()}


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

class FakeTransport(ICompletionTransport):
    """
    Answers by prompt kind (analysis / tiktok / twitter / linkedin / newsletter).
    A response that is an Exception instance is raised instead of returned.
    """

    def __init__(self, responses: Optional[Dict[str, Any]] = None, default: str = "{}"):
        self.responses = responses or {}
        self.default = default
        self.calls: List[Dict[str, Any]] = []

    def complete(self, *, system_instruction, user_prompt, model="", temperature=0.7, max_tokens=2000):
        kind = _KIND_BY_INSTRUCTION.get(system_instruction, "unknown")
        self.calls.append({
            "kind": kind,
            "user_prompt": user_prompt,
            "model": model,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        response = self.responses.get(kind, self.default)
        if isinstance(response, Exception):
            raise response
        return response

    def kinds(self) -> List[str]:
        return [c["kind"] for c in self.calls]


class FakeSpeechToText(ISpeechToText):
    def __init__(self, transcript: Optional[Dict[str, Any]] = None, error: Optional[Exception] = None):
        self.transcript = transcript
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def transcribe(self, source, *, chunk_duration=30, use_pause_based_chunking=False,
                   use_smart_format=True, model="", mimetype=""):
        self.calls.append({
            "source": source,
            "chunk_duration": chunk_duration,
            "use_pause_based_chunking": use_pause_based_chunking,
            "mimetype": mimetype,
        })
        if self.error is not None:
            raise self.error
        return self.transcript


class FakeEmailSender(IEmailSender):
    def __init__(self, configured: bool = True, error: Optional[Exception] = None):
        self.configured = configured
        self.error = error
        self.sent: List[Dict[str, Any]] = []

    def is_configured(self) -> bool:
        return self.configured

    def send(self, *, to, subject, text_body, html_body):
        if self.error is not None:
            raise self.error
        self.sent.append({"to": to, "subject": subject, "text_body": text_body, "html_body": html_body})
        return f"<fake-{len(self.sent)}@example.com>"


# ---------------------------------------------------------------------------
# Sample data factories
# ---------------------------------------------------------------------------

def make_transcript(chunks=None, duration=None) -> Dict[str, Any]:
    chunks = chunks if chunks is not None else [
        {"start": 0.0, "end": 30.0, "text": "Nobody needs to wake up at 5am."},
        {"start": 30.0, "end": 60.0, "text": "The hustle myth is sold by people who profit from it."},
        {"start": 60.0, "end": 95.0, "text": "Rest is part of the work."},
    ]
    metadata: Dict[str, Any] = {"chunkCount": len(chunks), "chunkDuration": 30}
    if duration is not None:
        metadata["duration"] = duration
    return {"transcript": chunks, "metadata": metadata}


def make_analysis(**overrides) -> Dict[str, Any]:
    analysis = {
        "title": "The Hustle Myth",
        "duration": "1:35",
        "topics": ["productivity", "rest"],
        "spicyMoments": [{"timestamp": "0:30", "quote": "The hustle myth is sold", "reason": "bold"}],
    }
    analysis.update(overrides)
    return analysis


ANALYSIS_JSON = (
    '{"title": "The Hustle Myth", "topics": ["productivity", "rest"], '
    '"spicyMoments": [{"timestamp": "0:30", "quote": "The hustle myth is sold", "reason": "bold"}]}'
)

CONTENT_JSON = {
    "tiktok": (
        '{"scripts": [{"title": "Skip 5am", "hook": "Nobody needs 5am", '
        '"content": "HOOK: line\\nBEAT 1: more", "tags": ["productivity"]}, '
        '{"title": "Rest wins", "hook": "Rest is work", "content": "HOOK: rest", "tags": []}]}'
    ),
    "twitter": (
        '{"threads": [{"title": "Hustle myth", "template": "hidden-truth", '
        '"content": "Harsh truth:\\n\\n1/ ...", "tags": ["hustle"]}]}'
    ),
    "linkedin": (
        '{"posts": [{"title": "What I unlearned", "content": "Story\\n\\nLesson", "tags": ["career"]}]}'
    ),
    "newsletter": (
        '{"newsletters": [{"title": "Rest", "content": "SUBJECT: Rest\\n\\nHey friend,", "tags": ["newsletter"]}]}'
    ),
}


@pytest.fixture
def transcript():
    return make_transcript()


@pytest.fixture
def analysis():
    return make_analysis()


@pytest.fixture
def happy_transport():
    return FakeTransport({"analysis": ANALYSIS_JSON, **CONTENT_JSON})


@pytest.fixture
def failing_transport():
    return FakeTransport(default=CompletionError("All LLM providers failed"))


@pytest.fixture
def speech_to_text(transcript):
    return FakeSpeechToText(transcript)


@pytest.fixture
def broken_speech_to_text():
    return FakeSpeechToText(error=TranscriptionError("Deepgram request failed: boom"))


@pytest.fixture
def email_sender():
    return FakeEmailSender()
