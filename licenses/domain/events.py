"""
License domain events.

Domain events represent something that happened in the license domain.
"""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from core.domain.events import DomainEvent


class LicenseCreated(DomainEvent):
    """Event raised when a license is created by hand."""

    def __init__(
        self, license_id: uuid.UUID, owner_id: int, occurred_at: Optional[datetime] = None
    ):
        super().__init__(aggregate_id=str(license_id), occurred_at=occurred_at)
        self.license_id = license_id
        self.owner_id = owner_id

    def to_dict(self):
        data = super().to_dict()
        data["owner_id"] = self.owner_id
        return data


class LicenseDeleted(DomainEvent):
    """Event raised when a license and its payments are deleted."""

    def __init__(
        self, license_id: uuid.UUID, owner_id: int, occurred_at: Optional[datetime] = None
    ):
        super().__init__(aggregate_id=str(license_id), occurred_at=occurred_at)
        self.license_id = license_id
        self.owner_id = owner_id


class LicenseStatusChanged(DomainEvent):
    """Event raised when a license status is set."""

    def __init__(
        self,
        license_id: uuid.UUID,
        owner_id: int,
        previous_status: str,
        new_status: str,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicenseStatusChanged event.

        Args:
            license_id: License UUID
            owner_id: Acting user id
            previous_status: Status before the change
            new_status: Status after the change
            occurred_at: When the event occurred
        """
        super().__init__(aggregate_id=str(license_id), occurred_at=occurred_at)
        self.license_id = license_id
        self.owner_id = owner_id
        self.previous_status = previous_status
        self.new_status = new_status

    def to_dict(self):
        data = super().to_dict()
        data.update(previous_status=self.previous_status, new_status=self.new_status)
        return data


class PaymentRecorded(DomainEvent):
    """Event raised when a payment record is written."""

    def __init__(
        self,
        payment_id: uuid.UUID,
        license_id: uuid.UUID,
        owner_id: int,
        amount: Decimal,
        automatic: bool,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize PaymentRecorded event.

        Args:
            payment_id: PaymentRecord UUID
            license_id: License UUID
            owner_id: Acting user id
            amount: Amount paid
            automatic: True when written by the Paid status transition
            occurred_at: When the event occurred
        """
        super().__init__(aggregate_id=str(license_id), occurred_at=occurred_at)
        self.payment_id = payment_id
        self.license_id = license_id
        self.owner_id = owner_id
        self.amount = amount
        self.automatic = automatic

    def to_dict(self):
        data = super().to_dict()
        data.update(
            payment_id=str(self.payment_id), amount=str(self.amount), automatic=self.automatic
        )
        return data


class LicensesImported(DomainEvent):
    """Event raised when a CSV batch is inserted."""

    def __init__(self, owner_id: int, row_count: int, occurred_at: Optional[datetime] = None):
        super().__init__(aggregate_id=str(owner_id), occurred_at=occurred_at)
        self.owner_id = owner_id
        self.row_count = row_count

    def to_dict(self):
        data = super().to_dict()
        data["row_count"] = self.row_count
        return data


class LicenseImportRejected(DomainEvent):
    """Event raised when a CSV batch fails validation and nothing is inserted."""

    def __init__(
        self,
        owner_id: int,
        row_count: int,
        error_count: int,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(aggregate_id=str(owner_id), occurred_at=occurred_at)
        self.owner_id = owner_id
        self.row_count = row_count
        self.error_count = error_count

    def to_dict(self):
        data = super().to_dict()
        data.update(row_count=self.row_count, error_count=self.error_count)
        return data
