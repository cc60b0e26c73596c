"""
UpdateNotificationPreferencesCommand.
"""
from dataclasses import dataclass
from typing import List, Optional


@dataclass
class UpdateNotificationPreferencesCommand:
    """Command to change a user's reminder settings. None leaves a field as is."""

    owner_id: int
    email_enabled: Optional[bool] = None
    days_before_expiry: Optional[List[int]] = None
