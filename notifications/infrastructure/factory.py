"""
Wiring for the notification sweep.
"""
from django.conf import settings

from licenses.infrastructure.expiry_config import notification_boundaries
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from notifications.application.handlers.expiry_sweep_handler import ExpirySweepHandler
from notifications.infrastructure.django_email_sender import DjangoEmailSender
from notifications.infrastructure.resend_email_sender import ResendEmailSender
from notifications.ports.email_sender import EmailSender


def get_email_sender() -> EmailSender:
    """Resend when RESEND_API_KEY is set, otherwise Django's mail backend."""
    if settings.RESEND_API_KEY:
        return ResendEmailSender(
            api_key=settings.RESEND_API_KEY,
            from_email=settings.NOTIFICATION_FROM_EMAIL,
            api_url=settings.RESEND_API_URL,
            timeout_seconds=settings.EMAIL_PROVIDER_TIMEOUT_SECONDS,
        )
    return DjangoEmailSender(from_email=settings.NOTIFICATION_FROM_EMAIL)


def build_expiry_sweep_handler(email_sender: EmailSender = None) -> ExpirySweepHandler:
    return ExpirySweepHandler(
        license_repository=DjangoLicenseRepository(),
        email_sender=email_sender or get_email_sender(),
        boundaries=notification_boundaries(),
        horizon_days=settings.EXPIRY_NOTIFICATION_HORIZON_DAYS,
    )
