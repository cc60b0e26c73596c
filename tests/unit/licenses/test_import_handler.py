"""
Unit tests for ImportLicensesHandler.
"""
import pytest

from core.domain.exceptions import CSVFormatError, CSVValidationError
from licenses.application.commands.import_licenses import ImportLicensesCommand
from licenses.application.handlers.import_licenses_handler import ImportLicensesHandler
from licenses.application.services.csv_import import IMPORT_COLUMNS, TEMPLATE_CSV
from licenses.domain.events import LicenseImportRejected, LicensesImported


@pytest.fixture
def handler(memory_license_repository, memory_reference_repository):
    return ImportLicensesHandler(memory_license_repository, memory_reference_repository)


@pytest.mark.asyncio
class TestImportLicensesHandler:
    """Tests for ImportLicensesHandler."""

    async def test_import_template(self, handler, memory_license_repository, published_events):
        command = ImportLicensesCommand(owner_id=3, payload=TEMPLATE_CSV.encode())
        result = await handler.handle(command)

        assert result.imported_count == 2
        imported = list(memory_license_repository.licenses.values())
        assert {item.owner_id for item in imported} == {3}
        assert {item.location_name for item in imported} == {"India"}
        design = next(item for item in imported if item.category == "Design")
        assert design.category_id is not None
        assert [type(event) for event in published_events] == [LicensesImported]
        assert published_events[0].row_count == 2

    async def test_header_only(self, handler, memory_license_repository, published_events):
        payload = ",".join(IMPORT_COLUMNS).encode()

        result = await handler.handle(ImportLicensesCommand(owner_id=3, payload=payload))

        assert result.imported_count == 0
        assert memory_license_repository.licenses == {}
        assert published_events == []

    async def test_invalid_rows_insert_nothing(
        self, handler, memory_license_repository, published_events
    ):
        payload = (TEMPLATE_CSV + "\n,,,,,,,,,,,,,").encode()

        with pytest.raises(CSVValidationError) as exc_info:
            await handler.handle(ImportLicensesCommand(owner_id=3, payload=payload))

        assert "Row 4: Product name is required" in exc_info.value.errors
        assert memory_license_repository.licenses == {}
        assert len(published_events) == 1
        rejected = published_events[0]
        assert isinstance(rejected, LicenseImportRejected)
        assert rejected.row_count == 3
        assert rejected.error_count == len(exc_info.value.errors)

    async def test_undecodable_payload(self, handler):
        with pytest.raises(CSVFormatError):
            await handler.handle(ImportLicensesCommand(owner_id=3, payload=b"\xff\xfe\xfa"))
