"""
License repository ports (interfaces).

This defines the contract for license and payment persistence.
Implementations are in the infrastructure layer. Every user-scoped
operation takes the owner id and only sees that owner's rows.
"""
from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Dict, List, Optional
import uuid

from licenses.domain.license import License, PaymentRecord


class LicenseRepository(ABC):
    """
    Abstract repository for License entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def save(self, license: License) -> License:
        """
        Insert a license entity.

        Args:
            license: License entity to save

        Returns:
            Saved license entity
        """
        pass

    @abstractmethod
    async def bulk_create(self, licenses: List[License]) -> int:
        """
        Insert a batch of licenses atomically.

        Args:
            licenses: License entities to insert

        Returns:
            Number of rows inserted
        """
        pass

    @abstractmethod
    async def find_by_id(self, license_id: uuid.UUID, owner_id: int) -> Optional[License]:
        """
        Find a license by ID within an owner's licenses.

        Args:
            license_id: License UUID
            owner_id: Owner user id

        Returns:
            License entity or None if not found
        """
        pass

    @abstractmethod
    async def find_by_owner(self, owner_id: int) -> List[License]:
        """
        Find all licenses of an owner, ordered by expiry date ascending.

        Args:
            owner_id: Owner user id

        Returns:
            List of License entities
        """
        pass

    @abstractmethod
    async def update_fields(
        self, license_id: uuid.UUID, owner_id: int, fields: Dict[str, Any]
    ) -> Optional[License]:
        """
        Apply field updates in a single UPDATE.

        Args:
            license_id: License UUID
            owner_id: Owner user id
            fields: Field name to new value

        Returns:
            Updated License entity or None if not found
        """
        pass

    @abstractmethod
    async def delete(self, license_id: uuid.UUID, owner_id: int) -> bool:
        """
        Delete a license and its payment records.

        Returns:
            True if a license was deleted
        """
        pass

    @abstractmethod
    async def find_expiring_with_notification_email(
        self, start: date, end: date
    ) -> List[License]:
        """
        Find licenses of every owner expiring in [start, end] with a notification email.

        Args:
            start: First expiry date included
            end: Last expiry date included

        Returns:
            List of License entities ordered by expiry date
        """
        pass


class PaymentRecordRepository(ABC):
    """Abstract repository for PaymentRecord entities."""

    @abstractmethod
    async def save(self, payment: PaymentRecord) -> PaymentRecord:
        """
        Insert a payment record.

        Args:
            payment: PaymentRecord entity to save

        Returns:
            Saved PaymentRecord entity
        """
        pass

    @abstractmethod
    async def find_by_license(self, license_id: uuid.UUID, owner_id: int) -> List[PaymentRecord]:
        """
        Find the payment records of a license, newest payment date first.

        Args:
            license_id: License UUID
            owner_id: Owner user id

        Returns:
            List of PaymentRecord entities
        """
        pass
