"""
Pytest configuration and shared fixtures.
"""

from datetime import date, timedelta
from decimal import Decimal

import pytest
from asgiref.sync import async_to_sync
from django.contrib.auth import get_user_model
from django.utils import timezone

from accounts.infrastructure.repositories.django_account_repository import (
    DjangoAccessTokenRepository,
    DjangoAccountRepository,
)
from catalog.infrastructure.repositories.django_reference_repository import (
    DjangoReferenceRepository,
)
from core.infrastructure.events import event_bus
from fakes import (
    InMemoryAccessTokenRepository,
    InMemoryAccountRepository,
    InMemoryLicenseRepository,
    InMemoryPaymentRecordRepository,
    InMemoryReferenceRepository,
    RecordingEmailSender,
)
from licenses.domain.license import License
from licenses.infrastructure.repositories.django_license_repository import (
    DjangoLicenseRepository,
    DjangoPaymentRecordRepository,
)

TODAY = date(2025, 1, 15)


@pytest.fixture
def today():
    """Fixed reference date for date-driven rules."""
    return TODAY


@pytest.fixture
def sample_license():
    """Fixture for a sample License entity expiring in 20 days."""
    return License.create(
        owner_id=1,
        product_name="Microsoft Office",
        vendor_name="Microsoft",
        category="Software",
        billing_cycle="Annual",
        amount=Decimal("99.00"),
        start_date=TODAY - timedelta(days=345),
        expiry_date=TODAY + timedelta(days=20),
        location_name="USA",
        notification_email="it@example.com",
    )


# In-memory ports for handler tests


@pytest.fixture
def memory_license_repository():
    return InMemoryLicenseRepository()


@pytest.fixture
def memory_payment_repository():
    return InMemoryPaymentRecordRepository()


@pytest.fixture
def memory_reference_repository():
    return InMemoryReferenceRepository()


@pytest.fixture
def memory_account_repository():
    return InMemoryAccountRepository()


@pytest.fixture
def memory_token_repository():
    return InMemoryAccessTokenRepository()


@pytest.fixture
def email_sender():
    return RecordingEmailSender()


@pytest.fixture
def published_events(monkeypatch):
    """Events published on the global bus during the test."""
    events = []

    async def _record(event):
        events.append(event)

    monkeypatch.setattr(event_bus, "publish", _record)
    return events


# Django repositories


@pytest.fixture
def license_repository():
    """Fixture for LicenseRepository."""
    return DjangoLicenseRepository()


@pytest.fixture
def payment_repository():
    """Fixture for PaymentRecordRepository."""
    return DjangoPaymentRecordRepository()


@pytest.fixture
def reference_repository():
    """Fixture for ReferenceRepository."""
    return DjangoReferenceRepository()


@pytest.fixture
def account_repository():
    """Fixture for AccountRepository."""
    return DjangoAccountRepository()


@pytest.fixture
def token_repository():
    """Fixture for AccessTokenRepository."""
    return DjangoAccessTokenRepository()


@pytest.fixture
def user(db):
    """Fixture for a registered user (profile and preferences provisioned)."""
    return get_user_model().objects.create_user(
        username="owner@example.com", email="owner@example.com", password="s3cret-pass"
    )


@pytest.fixture
def other_user(db):
    """Fixture for a second user."""
    return get_user_model().objects.create_user(
        username="other@example.com", email="other@example.com", password="s3cret-pass"
    )


@pytest.fixture
def access_token(user, token_repository):
    """Raw access token for the user."""
    return async_to_sync(token_repository.issue)(user.pk, None).raw_token


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def auth_client(api_client, access_token):
    """API client sending the user's bearer token."""
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {access_token}")
    return api_client


@pytest.fixture
def make_license(db, license_repository):
    """Factory saving a License for an owner."""

    def _make(owner, days_until_expiry=20, **overrides):
        today = timezone.localdate()
        fields = {
            "owner_id": owner.pk,
            "product_name": "Microsoft Office",
            "vendor_name": "Microsoft",
            "category": "Software",
            "billing_cycle": "Annual",
            "amount": Decimal("99.00"),
            "start_date": today - timedelta(days=300),
            "expiry_date": today + timedelta(days=days_until_expiry),
        }
        fields.update(overrides)
        return async_to_sync(license_repository.save)(License.create(**fields))

    return _make


@pytest.fixture
def db_license(user, make_license):
    """Fixture for a License saved in database."""
    return make_license(user)
