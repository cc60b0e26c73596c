"""
Account domain entities.

A UserProfile and a NotificationPreference exist exactly once per user;
both are created when the user registers.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Iterable, Optional, Tuple

from core.domain.exceptions import InvalidNotificationPreferenceError
from core.domain.value_objects import UserRole

ALLOWED_REMINDER_DAYS = (30, 15, 7, 3, 1)
DEFAULT_REMINDER_DAYS = (15, 7, 1)


def normalize_reminder_days(days: Iterable[int]) -> Tuple[int, ...]:
    """
    Validate reminder days and return them de-duplicated, descending.

    Raises:
        InvalidNotificationPreferenceError: If a value is not an allowed offset
    """
    unique = set()
    for day in days:
        if isinstance(day, bool) or not isinstance(day, int):
            raise InvalidNotificationPreferenceError(f"Reminder day must be an integer: {day!r}")
        if day not in ALLOWED_REMINDER_DAYS:
            allowed = ", ".join(str(d) for d in ALLOWED_REMINDER_DAYS)
            raise InvalidNotificationPreferenceError(
                f"Reminder day {day} is not one of: {allowed}"
            )
        unique.add(day)
    return tuple(sorted(unique, reverse=True))


@dataclass(frozen=True)
class UserProfile:
    """Profile of a registered user. The id equals the user id."""

    id: int
    email: str
    full_name: Optional[str]
    role: UserRole
    created_at: datetime
    updated_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


@dataclass(frozen=True)
class NotificationPreference:
    """
    Reminder settings of a user.

    Stored for the user's benefit; the expiry sweep sends on its own
    fixed urgency ladder.
    """

    id: uuid.UUID
    user_id: int
    email_enabled: bool
    days_before_expiry: Tuple[int, ...]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def default_for(cls, user_id: int) -> "NotificationPreference":
        """
        Create the preference every new user starts with.

        Args:
            user_id: Owning user id

        Returns:
            NotificationPreference with email enabled and the default days
        """
        now = datetime.utcnow()
        return cls(
            id=uuid.uuid4(),
            user_id=user_id,
            email_enabled=True,
            days_before_expiry=DEFAULT_REMINDER_DAYS,
            created_at=now,
            updated_at=now,
        )

    def update(
        self,
        email_enabled: Optional[bool] = None,
        days_before_expiry: Optional[Iterable[int]] = None,
    ) -> "NotificationPreference":
        """
        Return a copy with the given settings changed.

        Raises:
            InvalidNotificationPreferenceError: If the days are not allowed
        """
        changes = {"updated_at": datetime.utcnow()}
        if email_enabled is not None:
            changes["email_enabled"] = email_enabled
        if days_before_expiry is not None:
            changes["days_before_expiry"] = normalize_reminder_days(days_before_expiry)
        return replace(self, **changes)
