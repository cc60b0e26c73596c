"""
License DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from licenses.domain.expiry import ExpiryClassification
from licenses.domain.license import License, PaymentRecord


@dataclass
class ExpiryDTO:
    """DTO for an expiry classification."""

    days_until_expiry: int
    tier: Optional[str]
    label: str

    @classmethod
    def from_classification(cls, classification: ExpiryClassification) -> "ExpiryDTO":
        return cls(
            days_until_expiry=classification.days_until_expiry,
            tier=classification.tier,
            label=classification.label,
        )


@dataclass
class LicenseDTO:
    """DTO for license information."""

    id: uuid.UUID
    product_name: str
    vendor_name: str
    category: str
    category_id: Optional[uuid.UUID]
    location_id: Optional[uuid.UUID]
    location_name: Optional[str]
    billing_cycle: str
    amount: Decimal
    start_date: date
    expiry_date: date
    last_renewal_date: Optional[date]
    status: str
    payment_status: bool
    login_link: Optional[str]
    password: Optional[str]
    notes: Optional[str]
    notification_email: Optional[str]
    notification_phone: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
    expiry: Optional[ExpiryDTO] = None

    @classmethod
    def from_entity(
        cls, license: License, classification: Optional[ExpiryClassification] = None
    ) -> "LicenseDTO":
        return cls(
            id=license.id,
            product_name=license.product_name,
            vendor_name=license.vendor_name,
            category=license.category,
            category_id=license.category_id,
            location_id=license.location_id,
            location_name=license.location_name,
            billing_cycle=license.billing_cycle,
            amount=license.amount,
            start_date=license.start_date,
            expiry_date=license.expiry_date,
            last_renewal_date=license.last_renewal_date,
            status=license.status,
            payment_status=license.payment_status,
            login_link=license.login_link,
            password=license.password,
            notes=license.notes,
            notification_email=license.notification_email,
            notification_phone=license.notification_phone,
            created_at=license.created_at,
            updated_at=license.updated_at,
            expiry=ExpiryDTO.from_classification(classification) if classification else None,
        )


@dataclass
class StatusChangeResultDTO:
    """DTO for a status change; warning is set when the automatic payment failed."""

    license: LicenseDTO
    payment_recorded: bool
    warning: Optional[str] = None


@dataclass
class PaymentRecordDTO:
    """DTO for a payment record."""

    id: uuid.UUID
    license_id: uuid.UUID
    amount: Decimal
    payment_date: date
    payment_method: Optional[str]
    transaction_id: Optional[str]
    notes: Optional[str]
    created_at: Optional[datetime]

    @classmethod
    def from_entity(cls, payment: PaymentRecord) -> "PaymentRecordDTO":
        return cls(
            id=payment.id,
            license_id=payment.license_id,
            amount=payment.amount,
            payment_date=payment.payment_date,
            payment_method=payment.payment_method,
            transaction_id=payment.transaction_id,
            notes=payment.notes,
            created_at=payment.created_at,
        )


@dataclass
class PaymentHistoryDTO:
    """DTO for a license's payment history."""

    license_id: uuid.UUID
    payments: List[PaymentRecordDTO]
    total_paid: Decimal


@dataclass
class DashboardSummaryDTO:
    """DTO for dashboard counts."""

    total_licenses: int
    upcoming_renewals: int
    expired_licenses: int
    total_value: Decimal


@dataclass
class ImportResultDTO:
    """DTO for a successful CSV import."""

    imported_count: int


@dataclass
class CSVExportDTO:
    """DTO for a CSV download."""

    filename: str
    content: str
