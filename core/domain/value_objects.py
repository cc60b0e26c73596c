"""
Enumerated values shared across the license and account domains.
"""
from enum import Enum


class BillingCycle(Enum):
    """Billing cycle of a license."""

    MONTHLY = "Monthly"
    QUARTERLY = "Quarterly"
    SEMI_ANNUAL = "Semi-Annual"
    ANNUAL = "Annual"
    BIENNIAL = "Biennial"
    ONE_TIME = "One-time"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def values(cls):
        """Return the accepted billing cycle strings in declaration order."""
        return [cycle.value for cycle in cls]


class LicenseStatus(Enum):
    """
    Conventional license statuses.

    License status is stored as free text; these are the values the
    transition rules react to.
    """

    PENDING = "Pending"
    PAID = "Paid"
    CONFIRMED = "Confirmed"
    EXPIRED = "Expired"
    CANCELLED = "Cancelled"

    def __str__(self) -> str:
        return self.value


class UserRole(Enum):
    """Role of a user profile."""

    ADMIN = "admin"
    USER = "user"

    def __str__(self) -> str:
        return self.value
