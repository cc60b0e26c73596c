"""
License domain entities.

License and PaymentRecord are immutable; edits produce new instances.
"""
import uuid
from dataclasses import dataclass, fields, replace
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional, Union

from core.domain.value_objects import BillingCycle, LicenseStatus


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    A software license or subscription owned by one user. The owner
    never changes after creation.
    """

    id: uuid.UUID
    owner_id: int
    product_name: str
    vendor_name: str
    category: str
    billing_cycle: str
    amount: Decimal
    start_date: date
    expiry_date: date
    status: str = LicenseStatus.PENDING.value
    payment_status: bool = False
    category_id: Optional[uuid.UUID] = None
    location_id: Optional[uuid.UUID] = None
    location_name: Optional[str] = None
    last_renewal_date: Optional[date] = None
    login_link: Optional[str] = None
    password: Optional[str] = None
    notes: Optional[str] = None
    notification_email: Optional[str] = None
    notification_phone: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate license entity."""
        if self.amount < 0:
            raise ValueError("Amount cannot be negative")
        if self.billing_cycle not in BillingCycle.values():
            raise ValueError(f"Invalid billing cycle: {self.billing_cycle}")

    @classmethod
    def create(
        cls,
        owner_id: int,
        product_name: str,
        vendor_name: str,
        category: str,
        billing_cycle: str,
        amount: Decimal,
        start_date: date,
        expiry_date: date,
        license_id: Optional[uuid.UUID] = None,
        **optional: Any,
    ) -> "License":
        """
        Create a new License entity.

        Args:
            owner_id: Id of the creating user
            product_name: Product name
            vendor_name: Vendor name
            category: Free-text category name
            billing_cycle: One of the BillingCycle values
            amount: Non-negative amount
            start_date: Start of the license term
            expiry_date: End of the license term
            license_id: Optional UUID (generated if not provided)
            **optional: Any of the optional License fields

        Returns:
            License entity instance
        """
        now = datetime.utcnow()
        return cls(
            id=license_id or uuid.uuid4(),
            owner_id=owner_id,
            product_name=product_name,
            vendor_name=vendor_name,
            category=category,
            billing_cycle=billing_cycle,
            amount=Decimal(amount),
            start_date=start_date,
            expiry_date=expiry_date,
            created_at=now,
            updated_at=now,
            **optional,
        )

    def days_until_expiry(self, today: date) -> int:
        """Calendar days from today to the expiry date (negative once expired)."""
        return (self.expiry_date - today).days

    def apply(self, changes: "LicenseChanges") -> "License":
        """
        Return a copy with the given changes applied.

        Args:
            changes: Fields to change

        Returns:
            New License instance
        """
        return replace(self, **changes.to_update_fields())


@dataclass(frozen=True)
class PaymentRecord:
    """
    A payment made against a license.

    Amounts are informational; they are never reconciled against the
    license amount.
    """

    id: uuid.UUID
    license_id: uuid.UUID
    owner_id: int
    amount: Decimal
    payment_date: date
    payment_method: Optional[str] = None
    transaction_id: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate payment record."""
        if self.amount < 0:
            raise ValueError("Payment amount cannot be negative")

    @classmethod
    def create(
        cls,
        license_id: uuid.UUID,
        owner_id: int,
        amount: Decimal,
        payment_date: date,
        payment_method: Optional[str] = None,
        transaction_id: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> "PaymentRecord":
        """Create a new PaymentRecord entity."""
        now = datetime.utcnow()
        return cls(
            id=uuid.uuid4(),
            license_id=license_id,
            owner_id=owner_id,
            amount=Decimal(amount),
            payment_date=payment_date,
            payment_method=payment_method,
            transaction_id=transaction_id,
            notes=notes,
            created_at=now,
            updated_at=now,
        )


class _Unchanged(Enum):
    UNCHANGED = "UNCHANGED"

    def __repr__(self) -> str:
        return "UNCHANGED"


UNCHANGED = _Unchanged.UNCHANGED


@dataclass(frozen=True)
class LicenseChanges:
    """
    An edit to a license.

    Every field is either UNCHANGED or the new value (None clears an
    optional field). The owner is not editable.
    """

    product_name: Union[str, _Unchanged] = UNCHANGED
    vendor_name: Union[str, _Unchanged] = UNCHANGED
    category: Union[str, _Unchanged] = UNCHANGED
    category_id: Union[Optional[uuid.UUID], _Unchanged] = UNCHANGED
    location_id: Union[Optional[uuid.UUID], _Unchanged] = UNCHANGED
    billing_cycle: Union[str, _Unchanged] = UNCHANGED
    amount: Union[Decimal, _Unchanged] = UNCHANGED
    start_date: Union[date, _Unchanged] = UNCHANGED
    expiry_date: Union[date, _Unchanged] = UNCHANGED
    last_renewal_date: Union[Optional[date], _Unchanged] = UNCHANGED
    status: Union[str, _Unchanged] = UNCHANGED
    payment_status: Union[bool, _Unchanged] = UNCHANGED
    login_link: Union[Optional[str], _Unchanged] = UNCHANGED
    password: Union[Optional[str], _Unchanged] = UNCHANGED
    notes: Union[Optional[str], _Unchanged] = UNCHANGED
    notification_email: Union[Optional[str], _Unchanged] = UNCHANGED
    notification_phone: Union[Optional[str], _Unchanged] = UNCHANGED

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LicenseChanges":
        """Build changes from a mapping; unknown keys are ignored."""
        names = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in names})

    def to_update_fields(self) -> Dict[str, Any]:
        """
        Map to the column updates of a single UPDATE.

        Returns:
            Dict of field name to new value, in declaration order
        """
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNCHANGED
        }

    @property
    def is_empty(self) -> bool:
        return not self.to_update_fields()
