"""
UserProfile, NotificationPreference and AccessToken models.
"""
import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone

from accounts.domain.profile import DEFAULT_REMINDER_DAYS


def default_reminder_days():
    return list(DEFAULT_REMINDER_DAYS)


class UserProfile(models.Model):
    """
    Profile of a registered user.

    Created automatically when the user is created.
    """

    ROLE_CHOICES = [
        ("admin", "Admin"),
        ("user", "User"),
    ]

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name="profile",
    )
    email = models.EmailField()
    full_name = models.CharField(max_length=255, null=True, blank=True)
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default="user")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "profiles"

    def __str__(self):
        return self.email


class NotificationPreference(models.Model):
    """Reminder settings of a user."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notification_preference",
    )
    email_enabled = models.BooleanField(default=True)
    days_before_expiry = models.JSONField(default=default_reminder_days)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "notification_preferences"

    def __str__(self):
        return f"{self.user_id} - {self.days_before_expiry}"


class AccessToken(models.Model):
    """
    Bearer token for API authentication.

    Only the SHA-256 hash and an 8-character prefix are stored.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="access_tokens",
    )
    token_prefix = models.CharField(max_length=8, editable=False)
    token_hash = models.CharField(max_length=64, editable=False, unique=True)
    expires_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    last_used_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "access_tokens"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["token_hash"]),
        ]

    def __str__(self):
        return f"{self.user_id} - {self.token_prefix}..."

    def is_valid(self) -> bool:
        """
        Check whether the token has not expired.

        Returns:
            True if the token has no expiry or expires in the future
        """
        return self.expires_at is None or self.expires_at > timezone.now()
