"""
Account queries.
"""
from dataclasses import dataclass


@dataclass
class GetProfileQuery:
    """Query for the caller's own profile."""

    owner_id: int


@dataclass
class GetNotificationPreferencesQuery:
    """Query for the caller's notification preferences."""

    owner_id: int
