"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional

from core.domain.exceptions import InvalidLicenseDataError
from core.domain.value_objects import BillingCycle
from licenses.domain.license import License

RENEWAL_UPCOMING = "upcoming"
RENEWAL_EXPIRED = "expired"


class LicenseValidator:
    """Domain service for license validation on create and edit."""

    @staticmethod
    def validate(license: License) -> None:
        """
        Validate a license about to be written.

        Args:
            license: License to validate

        Raises:
            InvalidLicenseDataError: If a rule is violated
        """
        if not license.product_name or not license.product_name.strip():
            raise InvalidLicenseDataError("Product name is required")
        if not license.vendor_name or not license.vendor_name.strip():
            raise InvalidLicenseDataError("Vendor name is required")
        if not license.category or not license.category.strip():
            raise InvalidLicenseDataError("Category is required")
        if not license.amount.is_finite() or license.amount < 0:
            raise InvalidLicenseDataError("Amount must be a valid non-negative number")
        if license.billing_cycle not in BillingCycle.values():
            raise InvalidLicenseDataError(
                f"Billing cycle must be one of: {', '.join(BillingCycle.values())}"
            )
        if not license.status or not license.status.strip():
            raise InvalidLicenseDataError("Status is required")
        if license.expiry_date < license.start_date:
            raise InvalidLicenseDataError("Expiry date cannot be before start date")


def _amount_text(amount: Decimal) -> str:
    """Amount without trailing zeros, as users type it (100, 99.5)."""
    text = format(amount, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


@dataclass(frozen=True)
class LicenseFilter:
    """
    Criteria for the license list.

    Empty criteria match everything.
    """

    search: Optional[str] = None
    category: Optional[str] = None
    branch: Optional[str] = None
    renewal: Optional[str] = None

    def matches(self, license: License, today: date, upcoming_window_days: int) -> bool:
        if self.search and not self._matches_search(license):
            return False
        if self.category and license.category != self.category:
            return False
        if self.branch and license.location_name != self.branch:
            return False
        if self.renewal == RENEWAL_UPCOMING:
            return is_upcoming_renewal(license, today, upcoming_window_days)
        if self.renewal == RENEWAL_EXPIRED:
            return license.days_until_expiry(today) < 0
        return True

    def _matches_search(self, license: License) -> bool:
        term = self.search
        lowered = term.lower()
        lowered_fields = (
            license.product_name,
            license.vendor_name,
            license.category,
            license.location_name,
            license.billing_cycle,
            license.notes,
        )
        if any(value and lowered in value.lower() for value in lowered_fields):
            return True
        if lowered in _amount_text(license.amount):
            return True
        if term in license.expiry_date.isoformat() or term in license.start_date.isoformat():
            return True
        return lowered in ("paid" if license.payment_status else "unpaid")

    def apply(
        self, licenses: Iterable[License], today: date, upcoming_window_days: int
    ) -> List[License]:
        return [item for item in licenses if self.matches(item, today, upcoming_window_days)]


def is_upcoming_renewal(license: License, today: date, window_days: int) -> bool:
    """Unpaid and expiring within the window (today included)."""
    days = license.days_until_expiry(today)
    return 0 <= days <= window_days and not license.payment_status


@dataclass(frozen=True)
class DashboardSummary:
    """Counts and total value across a user's licenses."""

    total_licenses: int
    upcoming_renewals: int
    expired_licenses: int
    total_value: Decimal

    @classmethod
    def compute(
        cls, licenses: Iterable[License], today: date, upcoming_window_days: int
    ) -> "DashboardSummary":
        items = list(licenses)
        return cls(
            total_licenses=len(items),
            upcoming_renewals=sum(
                1 for item in items if is_upcoming_renewal(item, today, upcoming_window_days)
            ),
            expired_licenses=sum(1 for item in items if item.days_until_expiry(today) < 0),
            total_value=sum((item.amount for item in items), Decimal("0")),
        )
