"""Resend email sender (set RESEND_API_KEY and a verified RESEND_FROM_EMAIL in .env)."""

import logging
from typing import List, Optional

import requests
import resend

from one_take_studio import config
from one_take_studio.domain.errors import EmailDeliveryError
from one_take_studio.ports.interfaces import IEmailSender

logger = logging.getLogger(__name__)


class ResendEmailSender(IEmailSender):
    def __init__(
        self,
        api_key: Optional[str] = None,
        from_email: Optional[str] = None,
        from_name: Optional[str] = None,
    ):
        self.api_key = api_key if api_key is not None else config.RESEND_API_KEY
        self.from_email = from_email or config.RESEND_FROM_EMAIL
        self.from_name = from_name or config.RESEND_FROM_NAME

    def is_configured(self) -> bool:
        return bool(self.api_key)

    def send(
        self,
        *,
        to: List[str],
        subject: str,
        text_body: str,
        html_body: str,
    ) -> str:
        if not self.is_configured():
            raise EmailDeliveryError("Email service not configured")

        resend.api_key = self.api_key
        try:
            result = resend.Emails.send({
                "from": f"{self.from_name} <{self.from_email}>",
                "to": list(to),
                "subject": subject,
                "html": html_body,
                "text": text_body,
            })
        except (resend.exceptions.ResendError, requests.RequestException) as exc:
            raise EmailDeliveryError(f"Failed to send email: {exc}") from exc

        message_id = result.get("id", "") if isinstance(result, dict) else str(result)
        logger.info("Email sent to %s: %s", ", ".join(to), message_id)
        return message_id
