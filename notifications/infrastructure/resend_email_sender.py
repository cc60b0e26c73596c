"""
Resend email sender.

Posts to the Resend HTTP API. No retries: a failed send is reported to
the caller and recorded per license by the sweep.
"""
import logging

import requests
from asgiref.sync import sync_to_async

from core.domain.exceptions import EmailDeliveryError
from notifications.ports.email_sender import EmailSender

logger = logging.getLogger(__name__)


class ResendEmailSender(EmailSender):
    """EmailSender backed by the Resend API."""

    def __init__(self, api_key: str, from_email: str, api_url: str, timeout_seconds: int = 10):
        self.api_key = api_key
        self.from_email = from_email
        self.api_url = api_url
        self.timeout_seconds = timeout_seconds

    def _post(self, to: str, subject: str, html: str) -> str:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "from": self.from_email,
            "to": [to],
            "subject": subject,
            "html": html,
        }
        try:
            response = requests.post(
                self.api_url,
                json=payload,
                headers=headers,
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
            message_id = response.json().get("id")
        except requests.exceptions.RequestException as e:
            logger.warning("Resend delivery failed for %s: %s", to, e)
            raise EmailDeliveryError(str(e)) from e
        except ValueError as e:
            raise EmailDeliveryError("Email provider returned an invalid response") from e

        if not message_id:
            raise EmailDeliveryError("Email provider did not return a message id")
        return message_id

    async def send(self, to: str, subject: str, html: str) -> str:
        return await sync_to_async(self._post, thread_sensitive=False)(to, subject, html)
