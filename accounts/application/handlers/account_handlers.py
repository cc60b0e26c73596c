"""
Account handlers.

Handlers for registration, token issue, profile and notification
preference commands and queries.
"""
import logging
from datetime import timedelta
from typing import Optional

from django.utils import timezone

from accounts.application.commands.issue_access_token import IssueAccessTokenCommand
from accounts.application.commands.register_user import RegisterUserCommand
from accounts.application.commands.update_notification_preferences import (
    UpdateNotificationPreferencesCommand,
)
from accounts.application.dto.account_dto import (
    AccessTokenDTO,
    NotificationPreferencesDTO,
    ProfileDTO,
)
from accounts.application.queries.get_profile import (
    GetNotificationPreferencesQuery,
    GetProfileQuery,
)
from accounts.domain.profile import NotificationPreference, UserProfile
from accounts.ports.account_repository import AccessTokenRepository, AccountRepository
from core.domain.exceptions import InvalidCredentialsError, ProfileNotFoundError

logger = logging.getLogger(__name__)


def _profile_dto(profile: UserProfile) -> ProfileDTO:
    return ProfileDTO(
        id=profile.id,
        email=profile.email,
        full_name=profile.full_name,
        role=profile.role.value,
        created_at=profile.created_at,
    )


def _preferences_dto(preference: NotificationPreference) -> NotificationPreferencesDTO:
    return NotificationPreferencesDTO(
        email_enabled=preference.email_enabled,
        days_before_expiry=list(preference.days_before_expiry),
        updated_at=preference.updated_at,
    )


class _TokenIssuer:
    """Shared token issuing for registration and login."""

    def __init__(
        self,
        account_repository: AccountRepository,
        token_repository: AccessTokenRepository,
        token_ttl_days: Optional[int] = None,
    ):
        """Initialize handler with repositories."""
        self.account_repository = account_repository
        self.token_repository = token_repository
        self.token_ttl_days = token_ttl_days

    async def _issue(self, user_id: int, profile: Optional[UserProfile] = None) -> AccessTokenDTO:
        expires_at = None
        if self.token_ttl_days:
            expires_at = timezone.now() + timedelta(days=self.token_ttl_days)
        issued = await self.token_repository.issue(user_id, expires_at)
        return AccessTokenDTO(
            access_token=issued.raw_token,
            token_type="Bearer",
            expires_at=issued.expires_at,
            profile=_profile_dto(profile) if profile else None,
        )


class RegisterUserHandler(_TokenIssuer):
    """Handler for RegisterUserCommand."""

    async def handle(self, command: RegisterUserCommand) -> AccessTokenDTO:
        """
        Handle register user command.

        Args:
            command: RegisterUserCommand

        Returns:
            AccessTokenDTO with the new user's profile

        Raises:
            EmailAlreadyRegisteredError: If the email is taken
        """
        profile = await self.account_repository.create_user(
            email=command.email,
            password=command.password,
            full_name=command.full_name,
        )
        logger.info("User registered", extra={"user_id": profile.id})
        return await self._issue(profile.id, profile)


class IssueAccessTokenHandler(_TokenIssuer):
    """Handler for IssueAccessTokenCommand."""

    async def handle(self, command: IssueAccessTokenCommand) -> AccessTokenDTO:
        """
        Handle issue access token command.

        Raises:
            InvalidCredentialsError: If the credentials do not match
        """
        user_id = await self.account_repository.authenticate(command.email, command.password)
        if user_id is None:
            logger.warning("Failed login attempt", extra={"email": command.email})
            raise InvalidCredentialsError()
        profile = await self.account_repository.find_profile(user_id)
        return await self._issue(user_id, profile)


class GetProfileHandler:
    """Handler for GetProfileQuery."""

    def __init__(self, account_repository: AccountRepository):
        """Initialize handler with repository."""
        self.account_repository = account_repository

    async def handle(self, query: GetProfileQuery) -> ProfileDTO:
        profile = await self.account_repository.find_profile(query.owner_id)
        if not profile:
            raise ProfileNotFoundError()
        return _profile_dto(profile)


class GetNotificationPreferencesHandler:
    """Handler for GetNotificationPreferencesQuery."""

    def __init__(self, account_repository: AccountRepository):
        """Initialize handler with repository."""
        self.account_repository = account_repository

    async def handle(self, query: GetNotificationPreferencesQuery) -> NotificationPreferencesDTO:
        """
        Return the caller's preferences.

        Users created before provisioning existed get the defaults stored.
        """
        preference = await self.account_repository.find_preference(query.owner_id)
        if not preference:
            preference = await self.account_repository.save_preference(
                NotificationPreference.default_for(query.owner_id)
            )
        return _preferences_dto(preference)


class UpdateNotificationPreferencesHandler:
    """Handler for UpdateNotificationPreferencesCommand."""

    def __init__(self, account_repository: AccountRepository):
        """Initialize handler with repository."""
        self.account_repository = account_repository

    async def handle(
        self, command: UpdateNotificationPreferencesCommand
    ) -> NotificationPreferencesDTO:
        """
        Handle update notification preferences command.

        Raises:
            InvalidNotificationPreferenceError: If the days are not allowed
        """
        current = await self.account_repository.find_preference(command.owner_id)
        if not current:
            current = NotificationPreference.default_for(command.owner_id)

        updated = current.update(
            email_enabled=command.email_enabled,
            days_before_expiry=command.days_before_expiry,
        )
        saved = await self.account_repository.save_preference(updated)
        return _preferences_dto(saved)
