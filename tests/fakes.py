"""
In-memory implementations of the repository and provider ports.

Used by handler unit tests that do not need the database.
"""

import uuid
from dataclasses import replace
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from accounts.domain.access_token import IssuedToken, generate_raw_token
from accounts.domain.profile import NotificationPreference, UserProfile
from accounts.ports.account_repository import AccessTokenRepository, AccountRepository
from catalog.domain.reference import Category, Location
from catalog.ports.reference_repository import ReferenceRepository
from core.domain.exceptions import EmailAlreadyRegisteredError, EmailDeliveryError
from core.domain.value_objects import UserRole
from licenses.domain.license import License, PaymentRecord
from licenses.ports.license_repository import LicenseRepository, PaymentRecordRepository
from notifications.ports.email_sender import EmailSender


class InMemoryLicenseRepository(LicenseRepository):
    """LicenseRepository backed by a dict."""

    def __init__(self, licenses: Optional[List[License]] = None):
        self.licenses: Dict[uuid.UUID, License] = {}
        self.fail_expiry_query = False
        for license in licenses or []:
            self.licenses[license.id] = license

    async def save(self, license: License) -> License:
        self.licenses[license.id] = license
        return license

    async def bulk_create(self, licenses: List[License]) -> int:
        for license in licenses:
            self.licenses[license.id] = license
        return len(licenses)

    async def find_by_id(self, license_id: uuid.UUID, owner_id: int) -> Optional[License]:
        license = self.licenses.get(license_id)
        if license is None or license.owner_id != owner_id:
            return None
        return license

    async def find_by_owner(self, owner_id: int) -> List[License]:
        owned = [item for item in self.licenses.values() if item.owner_id == owner_id]
        return sorted(owned, key=lambda item: item.expiry_date)

    async def update_fields(
        self, license_id: uuid.UUID, owner_id: int, fields: Dict[str, Any]
    ) -> Optional[License]:
        license = await self.find_by_id(license_id, owner_id)
        if license is None:
            return None
        updated = replace(license, **fields)
        self.licenses[license_id] = updated
        return updated

    async def delete(self, license_id: uuid.UUID, owner_id: int) -> bool:
        if await self.find_by_id(license_id, owner_id) is None:
            return False
        del self.licenses[license_id]
        return True

    async def find_expiring_with_notification_email(self, start: date, end: date) -> List[License]:
        if self.fail_expiry_query:
            raise RuntimeError("database unavailable")
        matching = [
            item
            for item in self.licenses.values()
            if start <= item.expiry_date <= end and item.notification_email is not None
        ]
        return sorted(matching, key=lambda item: item.expiry_date)


class InMemoryPaymentRecordRepository(PaymentRecordRepository):
    """PaymentRecordRepository backed by a list."""

    def __init__(self, fail_on_save: bool = False):
        self.payments: List[PaymentRecord] = []
        self.fail_on_save = fail_on_save

    async def save(self, payment: PaymentRecord) -> PaymentRecord:
        if self.fail_on_save:
            raise RuntimeError("payment insert failed")
        self.payments.append(payment)
        return payment

    async def find_by_license(self, license_id: uuid.UUID, owner_id: int) -> List[PaymentRecord]:
        matching = [
            item
            for item in self.payments
            if item.license_id == license_id and item.owner_id == owner_id
        ]
        return sorted(matching, key=lambda item: item.payment_date, reverse=True)


class InMemoryReferenceRepository(ReferenceRepository):
    """ReferenceRepository with fixed categories and locations."""

    def __init__(self, categories=("Software", "Design"), locations=("USA", "India")):
        self.categories = [Category(id=uuid.uuid4(), name=name) for name in categories]
        self.locations = [Location(id=uuid.uuid4(), name=name) for name in locations]

    async def list_categories(self) -> List[Category]:
        return sorted(self.categories, key=lambda item: item.name)

    async def list_locations(self) -> List[Location]:
        return sorted(self.locations, key=lambda item: item.name)

    async def find_category(self, category_id: uuid.UUID) -> Optional[Category]:
        return next((item for item in self.categories if item.id == category_id), None)

    async def find_location(self, location_id: uuid.UUID) -> Optional[Location]:
        return next((item for item in self.locations if item.id == location_id), None)


class InMemoryAccountRepository(AccountRepository):
    """AccountRepository keeping users, profiles and preferences in dicts."""

    def __init__(self):
        self.passwords: Dict[str, str] = {}
        self.user_ids: Dict[str, int] = {}
        self.profiles: Dict[int, UserProfile] = {}
        self.preferences: Dict[int, NotificationPreference] = {}

    async def create_user(
        self, email: str, password: str, full_name: Optional[str] = None
    ) -> UserProfile:
        email = email.strip().lower()
        if email in self.user_ids:
            raise EmailAlreadyRegisteredError()
        user_id = len(self.user_ids) + 1
        now = datetime.utcnow()
        self.user_ids[email] = user_id
        self.passwords[email] = password
        profile = UserProfile(
            id=user_id,
            email=email,
            full_name=full_name,
            role=UserRole.USER,
            created_at=now,
            updated_at=now,
        )
        self.profiles[user_id] = profile
        self.preferences[user_id] = NotificationPreference.default_for(user_id)
        return profile

    async def authenticate(self, email: str, password: str) -> Optional[int]:
        email = email.strip().lower()
        if self.passwords.get(email) != password:
            return None
        return self.user_ids[email]

    async def find_profile(self, user_id: int) -> Optional[UserProfile]:
        return self.profiles.get(user_id)

    async def find_preference(self, user_id: int) -> Optional[NotificationPreference]:
        return self.preferences.get(user_id)

    async def save_preference(self, preference: NotificationPreference) -> NotificationPreference:
        self.preferences[preference.user_id] = preference
        return preference


class InMemoryAccessTokenRepository(AccessTokenRepository):
    """AccessTokenRepository that remembers issued tokens."""

    def __init__(self):
        self.issued: List[IssuedToken] = []

    async def issue(self, user_id: int, expires_at: Optional[datetime]) -> IssuedToken:
        token = IssuedToken(raw_token=generate_raw_token(), user_id=user_id, expires_at=expires_at)
        self.issued.append(token)
        return token


class RecordingEmailSender(EmailSender):
    """EmailSender that records messages and can fail for chosen recipients."""

    def __init__(self, failing_recipients=()):
        self.sent: List[Dict[str, str]] = []
        self.failing_recipients = set(failing_recipients)

    async def send(self, to: str, subject: str, html: str) -> str:
        if to in self.failing_recipients:
            raise EmailDeliveryError(f"Mailbox unavailable: {to}")
        self.sent.append({"to": to, "subject": subject, "html": html})
        return f"msg-{len(self.sent)}"
