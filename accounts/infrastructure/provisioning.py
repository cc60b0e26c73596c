"""
New-user provisioning.

Every user gets exactly one profile and one notification preference,
written in the same transaction that creates the user.
"""
import logging

from django.db import transaction

from accounts.domain.profile import DEFAULT_REMINDER_DAYS
from accounts.infrastructure.models import NotificationPreference, UserProfile

logger = logging.getLogger(__name__)


def provision_user(sender, instance, created, **kwargs):
    """post_save receiver for the user model."""
    if not created or kwargs.get("raw"):
        return

    with transaction.atomic():
        UserProfile.objects.get_or_create(
            user=instance,
            defaults={
                "email": instance.email or instance.get_username(),
                "full_name": instance.get_full_name() or None,
                "role": "admin" if instance.is_superuser else "user",
            },
        )
        NotificationPreference.objects.get_or_create(
            user=instance,
            defaults={
                "email_enabled": True,
                "days_before_expiry": list(DEFAULT_REMINDER_DAYS),
            },
        )

    logger.info("Provisioned profile and preferences", extra={"user_id": instance.pk})
