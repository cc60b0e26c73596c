"""
Account repository ports (interfaces).

This defines the contract for user, profile, preference and token
persistence. Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from accounts.domain.access_token import IssuedToken
from accounts.domain.profile import NotificationPreference, UserProfile


class AccountRepository(ABC):
    """Abstract repository for users, profiles and notification preferences."""

    @abstractmethod
    async def create_user(
        self, email: str, password: str, full_name: Optional[str] = None
    ) -> UserProfile:
        """
        Create a user; provisioning of profile and preference happens atomically.

        Args:
            email: Login email
            password: Raw password
            full_name: Optional display name

        Returns:
            The new user's profile

        Raises:
            EmailAlreadyRegisteredError: If the email is taken
        """
        pass

    @abstractmethod
    async def authenticate(self, email: str, password: str) -> Optional[int]:
        """
        Check credentials.

        Returns:
            User id, or None if the credentials do not match an active user
        """
        pass

    @abstractmethod
    async def find_profile(self, user_id: int) -> Optional[UserProfile]:
        """
        Find the profile of a user.

        Returns:
            UserProfile or None if not found
        """
        pass

    @abstractmethod
    async def find_preference(self, user_id: int) -> Optional[NotificationPreference]:
        """
        Find the notification preference of a user.

        Returns:
            NotificationPreference or None if not found
        """
        pass

    @abstractmethod
    async def save_preference(self, preference: NotificationPreference) -> NotificationPreference:
        """
        Insert or update a notification preference.

        Returns:
            Saved NotificationPreference
        """
        pass


class AccessTokenRepository(ABC):
    """Abstract repository for access tokens."""

    @abstractmethod
    async def issue(self, user_id: int, expires_at: Optional[datetime]) -> IssuedToken:
        """
        Create and store a new token for a user.

        Only the hash and prefix are persisted.

        Returns:
            IssuedToken holding the raw token
        """
        pass
