"""
RecordPaymentCommand.

Command to add a payment to a license's history by hand.
"""
import uuid
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass
class RecordPaymentCommand:
    """Command to record a payment against a license."""

    license_id: uuid.UUID
    owner_id: int
    amount: Decimal
    payment_date: date
    payment_method: Optional[str] = None
    transaction_id: Optional[str] = None
    notes: Optional[str] = None
