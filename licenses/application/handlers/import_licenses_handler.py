"""
CSV import handler.
"""
import logging

from catalog.ports.reference_repository import ReferenceRepository
from core.domain.exceptions import CSVValidationError
from core.infrastructure.events import event_bus
from licenses.application.commands.import_licenses import ImportLicensesCommand
from licenses.application.dto.license_dto import ImportResultDTO
from licenses.application.services.csv_import import LicenseCSVImporter
from licenses.domain.events import LicenseImportRejected, LicensesImported
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class ImportLicensesHandler:
    """Handler for ImportLicensesCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        reference_repository: ReferenceRepository,
    ):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.reference_repository = reference_repository

    async def handle(self, command: ImportLicensesCommand) -> ImportResultDTO:
        """
        Handle import licenses command.

        Args:
            command: ImportLicensesCommand

        Returns:
            ImportResultDTO with the number of inserted licenses

        Raises:
            CSVFormatError: If the payload cannot be decoded
            CSVValidationError: If any row is invalid; nothing is inserted
        """
        importer = LicenseCSVImporter(
            categories=await self.reference_repository.list_categories(),
            locations=await self.reference_repository.list_locations(),
        )

        try:
            licenses = importer.build(command.payload, command.owner_id)
        except CSVValidationError as e:
            await event_bus.publish(
                LicenseImportRejected(
                    owner_id=command.owner_id,
                    row_count=importer.count_rows(command.payload),
                    error_count=len(e.errors),
                )
            )
            raise

        if not licenses:
            return ImportResultDTO(imported_count=0)

        imported = await self.license_repository.bulk_create(licenses)
        logger.info(
            "Imported %d license(s) from CSV",
            imported,
            extra={"owner_id": command.owner_id},
        )
        await event_bus.publish(LicensesImported(owner_id=command.owner_id, row_count=imported))
        return ImportResultDTO(imported_count=imported)
