"""Ports (interfaces) – depend on these, implement in adapters."""

from one_take_studio.ports.interfaces import (
    ICompletionTransport,
    IEmailSender,
    ISpeechToText,
)

__all__ = [
    "ICompletionTransport",
    "IEmailSender",
    "ISpeechToText",
]
