"""
Django mail backend sender.

Used when no Resend API key is configured (development and tests).
"""
import uuid

from asgiref.sync import sync_to_async
from django.core.mail import send_mail
from django.utils.html import strip_tags

from core.domain.exceptions import EmailDeliveryError
from notifications.ports.email_sender import EmailSender


class DjangoEmailSender(EmailSender):
    """EmailSender backed by Django's configured EMAIL_BACKEND."""

    def __init__(self, from_email: str):
        self.from_email = from_email

    def _send(self, to: str, subject: str, html: str) -> str:
        try:
            sent = send_mail(
                subject,
                strip_tags(html),
                self.from_email,
                [to],
                html_message=html,
            )
        except Exception as e:  # pylint: disable=broad-exception-caught
            raise EmailDeliveryError(str(e)) from e
        if not sent:
            raise EmailDeliveryError(f"Email to {to} was not sent")
        return str(uuid.uuid4())

    async def send(self, to: str, subject: str, html: str) -> str:
        return await sync_to_async(self._send)(to, subject, html)
