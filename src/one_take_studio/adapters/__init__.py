"""
Adapters – concrete implementations of ports.
Swap a vendor by writing another ISpeechToText / ICompletionTransport /
IEmailSender and passing it to default_adapters() as an override.
"""

from one_take_studio.adapters.llm import LLMClient
from one_take_studio.adapters.mailer import ResendEmailSender
from one_take_studio.adapters.speech import DeepgramSpeechToText


def default_adapters(**overrides):
    """
    Build default adapter instances (configured from config / .env).
    Overrides: speech_to_text=..., transport=..., email_sender=... for testing or other vendors.
    """
    defaults = {
        "speech_to_text": DeepgramSpeechToText(),
        "transport": LLMClient(),
        "email_sender": ResendEmailSender(),
    }
    defaults.update(overrides)
    return defaults


__all__ = ["DeepgramSpeechToText", "LLMClient", "ResendEmailSender", "default_adapters"]
