"""
Notification domain events.
"""

import uuid
from datetime import datetime
from typing import Optional

from core.domain.events import DomainEvent


class ExpiryNotificationDispatched(DomainEvent):
    """Event raised once per license the sweep tried to notify."""

    def __init__(
        self,
        license_id: uuid.UUID,
        email: str,
        urgency: Optional[str],
        status: str,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize ExpiryNotificationDispatched event.

        Args:
            license_id: License UUID
            email: Recipient address
            urgency: Notification tier
            status: "sent" or "failed"
            occurred_at: When the event occurred
        """
        super().__init__(aggregate_id=str(license_id), occurred_at=occurred_at)
        self.license_id = license_id
        self.email = email
        self.urgency = urgency
        self.status = status

    def to_dict(self):
        data = super().to_dict()
        data.update(urgency=self.urgency, status=self.status)
        return data
