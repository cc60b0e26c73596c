"""
Account DTOs for API responses.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional


@dataclass
class ProfileDTO:
    """DTO for profile information."""

    id: int
    email: str
    full_name: Optional[str]
    role: str
    created_at: datetime


@dataclass
class AccessTokenDTO:
    """DTO for an issued access token."""

    access_token: str
    token_type: str
    expires_at: Optional[datetime]
    profile: Optional[ProfileDTO] = None


@dataclass
class NotificationPreferencesDTO:
    """DTO for notification preferences."""

    email_enabled: bool
    days_before_expiry: List[int]
    updated_at: datetime
