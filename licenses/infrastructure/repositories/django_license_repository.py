"""
Django implementation of LicenseRepository and PaymentRecordRepository ports.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from datetime import date
from typing import Any, Dict, List, Optional

from asgiref.sync import sync_to_async
from django.db import transaction
from django.utils import timezone

from licenses.domain.license import License, PaymentRecord
from licenses.infrastructure.models import License as LicenseModel
from licenses.infrastructure.models import PaymentRecord as PaymentRecordModel
from licenses.ports.license_repository import LicenseRepository, PaymentRecordRepository

# Domain field name -> model attribute, where they differ
_FIELD_COLUMNS = {
    "category_id": "category_ref_id",
}

_NON_UPDATABLE = {"id", "owner_id", "created_at", "updated_at", "location_name"}


class DjangoLicenseRepository(LicenseRepository):
    """
    Django ORM implementation of LicenseRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Scopes every user-facing query to the owner
    """

    def _to_domain(self, model: LicenseModel) -> License:
        """
        Convert Django model to domain entity.

        Args:
            model: Django License model

        Returns:
            License domain entity
        """
        return License(
            id=model.id,
            owner_id=model.owner_id,
            product_name=model.product_name,
            vendor_name=model.vendor_name,
            category=model.category,
            category_id=model.category_ref_id,
            location_id=model.location_id,
            location_name=model.location.name if model.location_id else None,
            billing_cycle=model.billing_cycle,
            amount=model.amount,
            start_date=model.start_date,
            expiry_date=model.expiry_date,
            last_renewal_date=model.last_renewal_date,
            status=model.status,
            payment_status=model.payment_status,
            login_link=model.login_link,
            password=model.password,
            notes=model.notes,
            notification_email=model.notification_email,
            notification_phone=model.notification_phone,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, license: License) -> LicenseModel:
        """
        Convert domain entity to an unsaved Django model.

        Args:
            license: License domain entity

        Returns:
            Django License model
        """
        return LicenseModel(
            id=license.id,
            owner_id=license.owner_id,
            product_name=license.product_name,
            vendor_name=license.vendor_name,
            category=license.category,
            category_ref_id=license.category_id,
            location_id=license.location_id,
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
        )

    def _owned(self, owner_id: int):
        # pylint: disable=no-member
        return LicenseModel.objects.select_related("location").filter(owner_id=owner_id)

    @sync_to_async
    def save(self, license: License) -> License:
        """
        Insert a license entity.

        Args:
            license: License entity to save

        Returns:
            Saved license entity
        """
        model = self._to_model(license)
        model.save(force_insert=True)
        return self._to_domain(self._owned(license.owner_id).get(id=model.id))

    @sync_to_async
    def bulk_create(self, licenses: List[License]) -> int:
        """Insert a batch of licenses in one transaction."""
        models = [self._to_model(license) for license in licenses]
        with transaction.atomic():
            # pylint: disable=no-member
            created = LicenseModel.objects.bulk_create(models)
        return len(created)

    @sync_to_async
    def find_by_id(self, license_id: uuid.UUID, owner_id: int) -> Optional[License]:
        """
        Find a license by ID within an owner's licenses.

        Args:
            license_id: License UUID
            owner_id: Owner user id

        Returns:
            License entity or None if not found
        """
        model = self._owned(owner_id).filter(id=license_id).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def find_by_owner(self, owner_id: int) -> List[License]:
        """Find all licenses of an owner, ordered by expiry date ascending."""
        models = self._owned(owner_id).order_by("expiry_date", "created_at")
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def update_fields(
        self, license_id: uuid.UUID, owner_id: int, fields: Dict[str, Any]
    ) -> Optional[License]:
        """
        Apply field updates in a single UPDATE.

        Args:
            license_id: License UUID
            owner_id: Owner user id
            fields: Domain field name to new value

        Returns:
            Updated License entity or None if not found
        """
        rejected = _NON_UPDATABLE.intersection(fields)
        if rejected:
            raise ValueError(f"Fields cannot be updated: {', '.join(sorted(rejected))}")

        queryset = self._owned(owner_id).filter(id=license_id)
        if fields:
            columns = {_FIELD_COLUMNS.get(name, name): value for name, value in fields.items()}
            columns["updated_at"] = timezone.now()
            if not queryset.update(**columns):
                return None

        model = queryset.first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def delete(self, license_id: uuid.UUID, owner_id: int) -> bool:
        """Delete a license; payment records cascade."""
        deleted, _ = self._owned(owner_id).filter(id=license_id).delete()
        return deleted > 0

    @sync_to_async
    def find_expiring_with_notification_email(self, start: date, end: date) -> List[License]:
        """Find licenses of every owner expiring in [start, end] with a notification email."""
        # pylint: disable=no-member
        models = (
            LicenseModel.objects.select_related("location")
            .filter(
                expiry_date__gte=start,
                expiry_date__lte=end,
                notification_email__isnull=False,
            )
            .order_by("expiry_date")
        )
        return [self._to_domain(model) for model in models]


class DjangoPaymentRecordRepository(PaymentRecordRepository):
    """Django ORM implementation of PaymentRecordRepository."""

    def _to_domain(self, model: PaymentRecordModel) -> PaymentRecord:
        return PaymentRecord(
            id=model.id,
            license_id=model.license_id,
            owner_id=model.owner_id,
            amount=model.amount,
            payment_date=model.payment_date,
            payment_method=model.payment_method,
            transaction_id=model.transaction_id,
            notes=model.notes,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @sync_to_async
    def save(self, payment: PaymentRecord) -> PaymentRecord:
        """
        Insert a payment record.

        Args:
            payment: PaymentRecord entity to save

        Returns:
            Saved PaymentRecord entity
        """
        # pylint: disable=no-member
        model = PaymentRecordModel.objects.create(
            id=payment.id,
            license_id=payment.license_id,
            owner_id=payment.owner_id,
            amount=payment.amount,
            payment_date=payment.payment_date,
            payment_method=payment.payment_method,
            transaction_id=payment.transaction_id,
            notes=payment.notes,
        )
        return self._to_domain(model)

    @sync_to_async
    def find_by_license(self, license_id: uuid.UUID, owner_id: int) -> List[PaymentRecord]:
        """Find the payment records of a license, newest payment date first."""
        # pylint: disable=no-member
        models = PaymentRecordModel.objects.filter(
            license_id=license_id, license__owner_id=owner_id
        ).order_by("-payment_date", "-created_at")
        return [self._to_domain(model) for model in models]
