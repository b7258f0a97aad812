"""Outbound email through the Resend HTTP API."""
import html
import logging

import httpx

from codehelper.core.config import Settings

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"


class EmailDeliveryError(Exception):
    pass


class EmailSender:
    """Sends mail with Resend. Without an API key messages are only logged."""

    def __init__(self, api_key: str | None, from_address: str, timeout: float = 10.0, client: httpx.AsyncClient | None = None):
        self.api_key = api_key
        self.from_address = from_address
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    async def send(self, to: str, subject: str, html_body: str, reply_to: str | None = None) -> None:
        if not self.enabled:
            logger.info("Email delivery disabled, not sending %r to %s", subject, to)
            return

        payload = {"from": self.from_address, "to": [to], "subject": subject, "html": html_body}
        if reply_to:
            payload["reply_to"] = reply_to
        try:
            response = await self._client.post(
                RESEND_API_URL,
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise EmailDeliveryError(f"Resend request failed: {exc}") from exc

    async def aclose(self) -> None:
        await self._client.aclose()


def create_email_sender(settings: Settings) -> EmailSender:
    return EmailSender(settings.resend_api_key, settings.contact_from_email)


def render_contact_email(name: str, email: str, subject: str, message: str) -> str:
    body = html.escape(message).replace("\n", "<br>")
    return (
        "<h2>New contact form submission</h2>"
        f"<p><strong>Name:</strong> {html.escape(name)}</p>"
        f"<p><strong>Email:</strong> {html.escape(email)}</p>"
        f"<p><strong>Subject:</strong> {html.escape(subject)}</p>"
        f"<p>{body}</p>"
    )
