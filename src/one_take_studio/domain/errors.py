"""Errors raised by adapters at the port boundary."""


class StudioError(Exception):
    """Base class for One-Take Studio errors."""


class TranscriptionError(StudioError):
    """Speech-to-text service unreachable or returned an error."""


class CompletionError(StudioError):
    """Every configured LLM provider failed to return a completion."""


class EmailDeliveryError(StudioError):
    """Email could not be sent (not configured or rejected by the provider)."""
