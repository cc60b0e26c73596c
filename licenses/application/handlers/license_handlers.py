"""
License handlers.

Handlers for creating, reading, editing and deleting licenses.
"""
import logging
import uuid
from typing import Optional

from django.utils import timezone

from catalog.ports.reference_repository import ReferenceRepository
from core.domain.exceptions import InvalidLicenseDataError, LicenseNotFoundError
from core.infrastructure.events import event_bus
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.commands.update_license import (
    DeleteLicenseCommand,
    UpdateLicenseCommand,
)
from licenses.application.dto.license_dto import LicenseDTO
from licenses.application.queries.license_queries import GetLicenseQuery
from licenses.domain.events import LicenseCreated, LicenseDeleted, LicenseStatusChanged
from licenses.domain.expiry import DEFAULT_DISPLAY_BOUNDARIES, ExpiryBoundaries, classify
from licenses.domain.license import License
from licenses.domain.services import LicenseValidator
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


async def ensure_references_exist(
    reference_repository: ReferenceRepository,
    category_id: Optional[uuid.UUID],
    location_id: Optional[uuid.UUID],
) -> None:
    """
    Reject category and location ids that do not exist.

    Raises:
        InvalidLicenseDataError: If either id is unknown
    """
    if category_id is not None and not await reference_repository.find_category(category_id):
        raise InvalidLicenseDataError(f"Category {category_id} does not exist")
    if location_id is not None and not await reference_repository.find_location(location_id):
        raise InvalidLicenseDataError(f"Location {location_id} does not exist")


class CreateLicenseHandler:
    """Handler for CreateLicenseCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        reference_repository: ReferenceRepository,
        boundaries: ExpiryBoundaries = DEFAULT_DISPLAY_BOUNDARIES,
    ):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.reference_repository = reference_repository
        self.boundaries = boundaries

    async def handle(self, command: CreateLicenseCommand) -> LicenseDTO:
        """
        Handle create license command.

        Args:
            command: CreateLicenseCommand

        Returns:
            Created LicenseDTO

        Raises:
            InvalidLicenseDataError: If the license data is invalid or refers to
                an unknown category or location
        """
        try:
            license = License.create(
                owner_id=command.owner_id,
                product_name=command.product_name,
                vendor_name=command.vendor_name,
                category=command.category,
                billing_cycle=command.billing_cycle,
                amount=command.amount,
                start_date=command.start_date,
                expiry_date=command.expiry_date,
                category_id=command.category_id,
                location_id=command.location_id,
                last_renewal_date=command.last_renewal_date,
                status=command.status,
                payment_status=command.payment_status,
                login_link=command.login_link,
                password=command.password,
                notes=command.notes,
                notification_email=command.notification_email,
                notification_phone=command.notification_phone,
            )
        except ValueError as e:
            raise InvalidLicenseDataError(str(e)) from e

        LicenseValidator.validate(license)
        await ensure_references_exist(
            self.reference_repository, license.category_id, license.location_id
        )
        saved = await self.license_repository.save(license)

        await event_bus.publish(LicenseCreated(license_id=saved.id, owner_id=saved.owner_id))

        return LicenseDTO.from_entity(
            saved, classify(saved.expiry_date, timezone.localdate(), self.boundaries)
        )


class GetLicenseHandler:
    """Handler for GetLicenseQuery."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        boundaries: ExpiryBoundaries = DEFAULT_DISPLAY_BOUNDARIES,
    ):
        """Initialize handler with repository."""
        self.license_repository = license_repository
        self.boundaries = boundaries

    async def handle(self, query: GetLicenseQuery) -> LicenseDTO:
        """
        Handle get license query.

        Raises:
            LicenseNotFoundError: If the license does not exist for this owner
        """
        license = await self.license_repository.find_by_id(query.license_id, query.owner_id)
        if not license:
            raise LicenseNotFoundError(f"License {query.license_id} not found")
        today = query.today or timezone.localdate()
        return LicenseDTO.from_entity(
            license, classify(license.expiry_date, today, self.boundaries)
        )


class UpdateLicenseHandler:
    """Handler for UpdateLicenseCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        reference_repository: ReferenceRepository,
        boundaries: ExpiryBoundaries = DEFAULT_DISPLAY_BOUNDARIES,
    ):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.reference_repository = reference_repository
        self.boundaries = boundaries

    async def handle(self, command: UpdateLicenseCommand) -> LicenseDTO:
        """
        Handle update license command.

        The edit is validated against the merged license and written as
        one UPDATE; concurrent edits are last-writer-wins.

        Raises:
            LicenseNotFoundError: If the license does not exist for this owner
            InvalidLicenseDataError: If the edited license would be invalid
        """
        current = await self.license_repository.find_by_id(command.license_id, command.owner_id)
        if not current:
            raise LicenseNotFoundError(f"License {command.license_id} not found")

        try:
            merged = current.apply(command.changes)
        except ValueError as e:
            raise InvalidLicenseDataError(str(e)) from e
        LicenseValidator.validate(merged)
        await ensure_references_exist(
            self.reference_repository,
            merged.category_id if merged.category_id != current.category_id else None,
            merged.location_id if merged.location_id != current.location_id else None,
        )

        updated: Optional[License] = await self.license_repository.update_fields(
            command.license_id, command.owner_id, command.changes.to_update_fields()
        )
        if not updated:
            raise LicenseNotFoundError(f"License {command.license_id} not found")

        if updated.status != current.status:
            await event_bus.publish(
                LicenseStatusChanged(
                    license_id=updated.id,
                    owner_id=command.owner_id,
                    previous_status=current.status,
                    new_status=updated.status,
                )
            )

        return LicenseDTO.from_entity(
            updated, classify(updated.expiry_date, timezone.localdate(), self.boundaries)
        )


class DeleteLicenseHandler:
    """Handler for DeleteLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, command: DeleteLicenseCommand) -> None:
        """
        Handle delete license command. Payment records are deleted with it.

        Raises:
            LicenseNotFoundError: If the license does not exist for this owner
        """
        deleted = await self.license_repository.delete(command.license_id, command.owner_id)
        if not deleted:
            raise LicenseNotFoundError(f"License {command.license_id} not found")

        await event_bus.publish(
            LicenseDeleted(license_id=command.license_id, owner_id=command.owner_id)
        )
