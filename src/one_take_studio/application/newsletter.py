"""Newsletter delivery through the IEmailSender port."""

import html
from typing import List, Union

from one_take_studio.ports.interfaces import IEmailSender

PRE_STYLE = "font-family: Arial, sans-serif; white-space: pre-wrap;"


def newsletter_html(body: str) -> str:
    """Plain-text newsletter wrapped in a <pre> block, HTML-escaped."""
    return f'<pre style="{PRE_STYLE}">{html.escape(body)}</pre>'


def recipients(to: Union[str, List[str]]) -> List[str]:
    """Accepts one address, a comma separated string or a list."""
    if isinstance(to, str):
        to = to.split(",")
    return [address.strip() for address in to if isinstance(address, str) and address.strip()]


def send_newsletter(sender: IEmailSender, *, to: Union[str, List[str]], subject: str, body: str) -> str:
    """Send the newsletter text; returns the message id (EmailDeliveryError on failure)."""
    return sender.send(
        to=recipients(to),
        subject=subject,
        text_body=body,
        html_body=newsletter_html(body),
    )
