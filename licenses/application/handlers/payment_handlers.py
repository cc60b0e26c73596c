"""
Payment history handlers.
"""
import logging
from decimal import Decimal

from core.domain.exceptions import InvalidLicenseDataError, LicenseNotFoundError
from core.infrastructure.events import event_bus
from licenses.application.commands.record_payment import RecordPaymentCommand
from licenses.application.dto.license_dto import PaymentHistoryDTO, PaymentRecordDTO
from licenses.application.queries.license_queries import ListPaymentsQuery
from licenses.domain.events import LicenseStatusChanged, PaymentRecorded
from licenses.domain.license import PaymentRecord
from licenses.domain.transitions import updates_after_manual_payment
from licenses.ports.license_repository import LicenseRepository, PaymentRecordRepository

logger = logging.getLogger(__name__)


class RecordPaymentHandler:
    """Handler for RecordPaymentCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        payment_repository: PaymentRecordRepository,
    ):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.payment_repository = payment_repository

    async def handle(self, command: RecordPaymentCommand) -> PaymentRecordDTO:
        """
        Handle record payment command.

        The payment is inserted first; the license is then marked Paid.

        Raises:
            LicenseNotFoundError: If the license does not exist for this owner
            InvalidLicenseDataError: If the amount is negative
        """
        license = await self.license_repository.find_by_id(command.license_id, command.owner_id)
        if not license:
            raise LicenseNotFoundError(f"License {command.license_id} not found")

        try:
            payment = PaymentRecord.create(
                license_id=license.id,
                owner_id=command.owner_id,
                amount=command.amount,
                payment_date=command.payment_date,
                payment_method=command.payment_method,
                transaction_id=command.transaction_id,
                notes=command.notes,
            )
        except ValueError as e:
            raise InvalidLicenseDataError(str(e)) from e

        saved = await self.payment_repository.save(payment)
        await self.license_repository.update_fields(
            license.id, command.owner_id, updates_after_manual_payment()
        )

        await event_bus.publish(
            PaymentRecorded(
                payment_id=saved.id,
                license_id=license.id,
                owner_id=command.owner_id,
                amount=saved.amount,
                automatic=False,
            )
        )
        if license.status != "Paid":
            await event_bus.publish(
                LicenseStatusChanged(
                    license_id=license.id,
                    owner_id=command.owner_id,
                    previous_status=license.status,
                    new_status="Paid",
                )
            )

        return PaymentRecordDTO.from_entity(saved)


class ListPaymentsHandler:
    """Handler for ListPaymentsQuery."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        payment_repository: PaymentRecordRepository,
    ):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.payment_repository = payment_repository

    async def handle(self, query: ListPaymentsQuery) -> PaymentHistoryDTO:
        """
        Handle list payments query.

        Raises:
            LicenseNotFoundError: If the license does not exist for this owner
        """
        license = await self.license_repository.find_by_id(query.license_id, query.owner_id)
        if not license:
            raise LicenseNotFoundError(f"License {query.license_id} not found")

        payments = await self.payment_repository.find_by_license(query.license_id, query.owner_id)
        return PaymentHistoryDTO(
            license_id=license.id,
            payments=[PaymentRecordDTO.from_entity(payment) for payment in payments],
            total_paid=sum((payment.amount for payment in payments), Decimal("0")),
        )
