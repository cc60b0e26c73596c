"""
CreateLicenseCommand.

Command to add a license for the calling user.
"""
import uuid
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass
class CreateLicenseCommand:
    """Command to create a license owned by owner_id."""

    owner_id: int
    product_name: str
    vendor_name: str
    category: str
    billing_cycle: str
    amount: Decimal
    start_date: date
    expiry_date: date
    category_id: Optional[uuid.UUID] = None
    location_id: Optional[uuid.UUID] = None
    last_renewal_date: Optional[date] = None
    status: str = "Pending"
    payment_status: bool = False
    login_link: Optional[str] = None
    password: Optional[str] = None
    notes: Optional[str] = None
    notification_email: Optional[str] = None
    notification_phone: Optional[str] = None
