"""
Sweep DTOs.
"""
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

SENT = "sent"
FAILED = "failed"
SKIPPED = "skipped"


@dataclass
class NotificationOutcomeDTO:
    """Result of notifying one license."""

    license_id: uuid.UUID
    email: str
    days_until_expiry: int
    urgency: Optional[str]
    status: str
    email_id: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "license_id": str(self.license_id),
            "email": self.email,
            "days_until_expiry": self.days_until_expiry,
            "urgency": self.urgency,
            "status": self.status,
        }
        if self.status == SENT:
            data["email_id"] = self.email_id
        elif self.status == FAILED:
            data["error"] = self.error
        return data


@dataclass
class ExpirySweepResultDTO:
    """Summary of one sweep."""

    success: bool
    checked_licenses: int = 0
    details: List[NotificationOutcomeDTO] = field(default_factory=list)
    error: Optional[str] = None
    dry_run: bool = False

    @property
    def notifications_sent(self) -> int:
        return sum(1 for outcome in self.details if outcome.status == SENT)

    @property
    def notifications_failed(self) -> int:
        return sum(1 for outcome in self.details if outcome.status == FAILED)

    def to_dict(self) -> Dict[str, Any]:
        if not self.success:
            return {"success": False, "error": self.error}
        data = {
            "success": True,
            "checked_licenses": self.checked_licenses,
            "notifications_sent": self.notifications_sent,
            "notifications_failed": self.notifications_failed,
            "details": [outcome.to_dict() for outcome in self.details],
        }
        if self.dry_run:
            data["dry_run"] = True
        return data
