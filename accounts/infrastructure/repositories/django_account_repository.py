"""
Django implementation of the account repository ports.

This adapter converts between domain entities and Django ORM models.
"""
from datetime import datetime
from typing import Optional

from asgiref.sync import sync_to_async
from django.contrib.auth import authenticate, get_user_model
from django.db import transaction

from accounts.domain.access_token import IssuedToken, generate_raw_token, hash_token
from accounts.domain.profile import NotificationPreference, UserProfile
from accounts.infrastructure.models import AccessToken as AccessTokenModel
from accounts.infrastructure.models import NotificationPreference as PreferenceModel
from accounts.infrastructure.models import UserProfile as ProfileModel
from accounts.ports.account_repository import AccessTokenRepository, AccountRepository
from core.domain.exceptions import EmailAlreadyRegisteredError
from core.domain.value_objects import UserRole


class DjangoAccountRepository(AccountRepository):
    """
    Django ORM implementation of AccountRepository.

    The Django user model is the identity; usernames are the
    lower-cased email address.
    """

    def _profile_to_domain(self, model: ProfileModel) -> UserProfile:
        return UserProfile(
            id=model.user_id,
            email=model.email,
            full_name=model.full_name,
            role=UserRole(model.role),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _preference_to_domain(self, model: PreferenceModel) -> NotificationPreference:
        return NotificationPreference(
            id=model.id,
            user_id=model.user_id,
            email_enabled=model.email_enabled,
            days_before_expiry=tuple(sorted(model.days_before_expiry or [], reverse=True)),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @sync_to_async
    def create_user(
        self, email: str, password: str, full_name: Optional[str] = None
    ) -> UserProfile:
        """
        Create a user together with its profile and preference.

        Args:
            email: Login email
            password: Raw password
            full_name: Optional display name

        Returns:
            The new user's profile

        Raises:
            EmailAlreadyRegisteredError: If the email is taken
        """
        user_model = get_user_model()
        username = email.strip().lower()

        with transaction.atomic():
            if user_model.objects.filter(username__iexact=username).exists():
                raise EmailAlreadyRegisteredError(f"Email {username} is already registered")

            # post_save provisioning creates the profile and preference
            user = user_model.objects.create_user(
                username=username, email=username, password=password
            )
            # pylint: disable=no-member
            profile = ProfileModel.objects.select_for_update().get(user=user)
            if full_name:
                profile.full_name = full_name
                profile.save(update_fields=["full_name", "updated_at"])

        return self._profile_to_domain(profile)

    @sync_to_async
    def authenticate(self, email: str, password: str) -> Optional[int]:
        """Check credentials and return the user id on success."""
        user = authenticate(username=email.strip().lower(), password=password)
        if user is None:
            return None
        return user.pk

    @sync_to_async
    def find_profile(self, user_id: int) -> Optional[UserProfile]:
        """Find the profile of a user."""
        # pylint: disable=no-member
        model = ProfileModel.objects.filter(user_id=user_id).first()
        return self._profile_to_domain(model) if model else None

    @sync_to_async
    def find_preference(self, user_id: int) -> Optional[NotificationPreference]:
        """Find the notification preference of a user."""
        # pylint: disable=no-member
        model = PreferenceModel.objects.filter(user_id=user_id).first()
        return self._preference_to_domain(model) if model else None

    @sync_to_async
    def save_preference(self, preference: NotificationPreference) -> NotificationPreference:
        """Insert or update a notification preference (one row per user)."""
        # pylint: disable=no-member
        model, _ = PreferenceModel.objects.update_or_create(
            user_id=preference.user_id,
            defaults={
                "email_enabled": preference.email_enabled,
                "days_before_expiry": list(preference.days_before_expiry),
            },
        )
        return self._preference_to_domain(model)


class DjangoAccessTokenRepository(AccessTokenRepository):
    """Django ORM implementation of AccessTokenRepository."""

    @sync_to_async
    def issue(self, user_id: int, expires_at: Optional[datetime]) -> IssuedToken:
        """Create and store a new token for a user."""
        issued = IssuedToken(
            raw_token=generate_raw_token(),
            user_id=user_id,
            expires_at=expires_at,
        )
        # pylint: disable=no-member
        AccessTokenModel.objects.create(
            user_id=user_id,
            token_prefix=issued.prefix,
            token_hash=hash_token(issued.raw_token),
            expires_at=expires_at,
        )
        return issued
