"""
Unit tests for License and PaymentRecord entities.
"""
import uuid
from datetime import date, timedelta
from decimal import Decimal

import pytest

from licenses.domain.license import UNCHANGED, License, LicenseChanges, PaymentRecord


def _license(**overrides):
    fields = {
        "owner_id": 1,
        "product_name": "Slack",
        "vendor_name": "Salesforce",
        "category": "Communication",
        "billing_cycle": "Monthly",
        "amount": Decimal("12.50"),
        "start_date": date(2025, 1, 1),
        "expiry_date": date(2025, 2, 1),
    }
    fields.update(overrides)
    return License.create(**fields)


class TestLicenseEntity:
    """Tests for License entity."""

    def test_create_license(self):
        """Test creating a license."""
        license = _license()

        assert license.id is not None
        assert license.owner_id == 1
        assert license.status == "Pending"
        assert license.payment_status is False
        assert license.created_at is not None

    def test_create_with_given_id_and_optional_fields(self):
        license_id = uuid.uuid4()
        license = _license(license_id=license_id, notes="Team plan", notification_email="a@b.co")

        assert license.id == license_id
        assert license.notes == "Team plan"
        assert license.notification_email == "a@b.co"

    def test_negative_amount_rejected(self):
        with pytest.raises(ValueError, match="negative"):
            _license(amount=Decimal("-1"))

    def test_unknown_billing_cycle_rejected(self):
        with pytest.raises(ValueError, match="billing cycle"):
            _license(billing_cycle="Weekly")

    def test_days_until_expiry(self):
        license = _license(expiry_date=date(2025, 2, 1))
        assert license.days_until_expiry(date(2025, 1, 25)) == 7
        assert license.days_until_expiry(date(2025, 2, 3)) == -2

    def test_apply_changes_returns_new_instance(self):
        license = _license()
        changed = license.apply(LicenseChanges(amount=Decimal("15.00"), notes=None))

        assert changed.amount == Decimal("15.00")
        assert changed.notes is None
        assert changed.product_name == license.product_name
        assert license.amount == Decimal("12.50")


class TestLicenseChanges:
    """Tests for LicenseChanges."""

    def test_defaults_are_unchanged(self):
        changes = LicenseChanges()
        assert changes.product_name is UNCHANGED
        assert changes.is_empty

    def test_none_clears_optional_field(self):
        changes = LicenseChanges(notes=None, login_link="https://example.com")
        assert changes.to_update_fields() == {"login_link": "https://example.com", "notes": None}

    def test_from_dict_ignores_unknown_keys(self):
        changes = LicenseChanges.from_dict({"owner_id": 99, "status": "Paid", "bogus": 1})
        assert changes.to_update_fields() == {"status": "Paid"}


class TestPaymentRecord:
    def test_create_payment(self):
        license_id = uuid.uuid4()
        payment = PaymentRecord.create(
            license_id=license_id,
            owner_id=1,
            amount=Decimal("10"),
            payment_date=date(2025, 1, 1) + timedelta(days=3),
            payment_method="Card",
        )
        assert payment.license_id == license_id
        assert payment.amount == Decimal("10")
        assert payment.payment_method == "Card"
        assert payment.transaction_id is None

    def test_negative_payment_rejected(self):
        with pytest.raises(ValueError, match="negative"):
            PaymentRecord.create(
                license_id=uuid.uuid4(),
                owner_id=1,
                amount=Decimal("-5"),
                payment_date=date(2025, 1, 1),
            )
