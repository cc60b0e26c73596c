"""
Status and payment transition rules.

Plans the field updates that follow a status change, plus the payment
record written when a license is marked Paid.
"""
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

from core.domain.value_objects import LicenseStatus
from licenses.domain.license import License, PaymentRecord

PAID_STATUSES = (LicenseStatus.PAID.value, LicenseStatus.CONFIRMED.value)
UNPAID_STATUSES = (LicenseStatus.EXPIRED.value, LicenseStatus.CANCELLED.value)

AUTO_PAYMENT_NOTE = "Payment recorded automatically when status updated to Paid"


@dataclass(frozen=True)
class StatusTransitionPlan:
    """Field updates for the license row and an optional payment to record."""

    updates: Dict[str, Any]
    payment: Optional[PaymentRecord] = None


def payment_status_for(status: str) -> Optional[bool]:
    """
    Payment flag implied by a status.

    Returns:
        True or False when the status dictates it, None when unchanged
    """
    if status in PAID_STATUSES:
        return True
    if status in UNPAID_STATUSES:
        return False
    return None


def plan_status_change(
    license: License, new_status: str, acting_owner_id: int, today: date
) -> StatusTransitionPlan:
    """
    Plan a status change.

    Args:
        license: Current license
        new_status: Requested status
        acting_owner_id: User performing the change
        today: Date used for an automatic payment record

    Returns:
        StatusTransitionPlan
    """
    updates: Dict[str, Any] = {"status": new_status}
    payment_status = payment_status_for(new_status)
    if payment_status is not None:
        updates["payment_status"] = payment_status

    payment = None
    if new_status == LicenseStatus.PAID.value and license.status != LicenseStatus.PAID.value:
        payment = PaymentRecord.create(
            license_id=license.id,
            owner_id=acting_owner_id,
            amount=license.amount,
            payment_date=today,
            notes=AUTO_PAYMENT_NOTE,
        )
    return StatusTransitionPlan(updates=updates, payment=payment)


def updates_after_manual_payment() -> Dict[str, Any]:
    """Fields set on the parent license once a payment is recorded by hand."""
    return {"status": LicenseStatus.PAID.value, "payment_status": True}
