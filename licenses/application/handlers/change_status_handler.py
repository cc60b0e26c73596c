"""
Status transition handler.

A status change is one UPDATE of the license row. Marking a license
Paid also writes a payment record; that insert is best-effort and a
failure never undoes the status change.
"""
import logging

from django.utils import timezone

from core.domain.exceptions import LicenseNotFoundError
from core.infrastructure.events import event_bus
from licenses.application.commands.change_license_status import ChangeLicenseStatusCommand
from licenses.application.dto.license_dto import LicenseDTO, StatusChangeResultDTO
from licenses.domain.events import LicenseStatusChanged, PaymentRecorded
from licenses.domain.expiry import DEFAULT_DISPLAY_BOUNDARIES, ExpiryBoundaries, classify
from licenses.domain.transitions import plan_status_change
from licenses.ports.license_repository import LicenseRepository, PaymentRecordRepository

logger = logging.getLogger(__name__)

PAYMENT_RECORD_WARNING = "Status updated, but the payment record could not be created"


class ChangeLicenseStatusHandler:
    """Handler for ChangeLicenseStatusCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        payment_repository: PaymentRecordRepository,
        boundaries: ExpiryBoundaries = DEFAULT_DISPLAY_BOUNDARIES,
    ):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.payment_repository = payment_repository
        self.boundaries = boundaries

    async def handle(self, command: ChangeLicenseStatusCommand) -> StatusChangeResultDTO:
        """
        Handle change license status command.

        Args:
            command: ChangeLicenseStatusCommand

        Returns:
            StatusChangeResultDTO; warning is set if the automatic payment failed

        Raises:
            LicenseNotFoundError: If the license does not exist for this owner
        """
        today = command.today or timezone.localdate()

        license = await self.license_repository.find_by_id(command.license_id, command.owner_id)
        if not license:
            raise LicenseNotFoundError(f"License {command.license_id} not found")

        plan = plan_status_change(license, command.status, command.owner_id, today)

        updated = await self.license_repository.update_fields(
            command.license_id, command.owner_id, plan.updates
        )
        if not updated:
            raise LicenseNotFoundError(f"License {command.license_id} not found")

        await event_bus.publish(
            LicenseStatusChanged(
                license_id=updated.id,
                owner_id=command.owner_id,
                previous_status=license.status,
                new_status=updated.status,
            )
        )

        payment_recorded = False
        warning = None
        if plan.payment:
            try:
                payment = await self.payment_repository.save(plan.payment)
            except Exception as e:  # pylint: disable=broad-exception-caught
                logger.warning(
                    "Automatic payment record failed for license %s: %s",
                    updated.id,
                    e,
                    extra={"license_id": str(updated.id), "owner_id": command.owner_id},
                )
                warning = PAYMENT_RECORD_WARNING
            else:
                payment_recorded = True
                await event_bus.publish(
                    PaymentRecorded(
                        payment_id=payment.id,
                        license_id=updated.id,
                        owner_id=command.owner_id,
                        amount=payment.amount,
                        automatic=True,
                    )
                )

        return StatusChangeResultDTO(
            license=LicenseDTO.from_entity(
                updated, classify(updated.expiry_date, today, self.boundaries)
            ),
            payment_recorded=payment_recorded,
            warning=warning,
        )
