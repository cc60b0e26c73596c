"""
Unit tests for license CRUD and list handlers.
"""
import uuid
from dataclasses import replace
from datetime import date, timedelta
from decimal import Decimal

import pytest

from core.domain.exceptions import InvalidLicenseDataError, LicenseNotFoundError
from fakes import InMemoryLicenseRepository, InMemoryReferenceRepository
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.commands.update_license import (
    DeleteLicenseCommand,
    UpdateLicenseCommand,
)
from licenses.application.handlers.license_handlers import (
    CreateLicenseHandler,
    DeleteLicenseHandler,
    GetLicenseHandler,
    UpdateLicenseHandler,
)
from licenses.application.handlers.list_licenses_handler import (
    ExportLicensesHandler,
    GetDashboardSummaryHandler,
    ListExpiringLicensesHandler,
    ListLicensesHandler,
)
from licenses.application.queries.license_queries import (
    ExportLicensesQuery,
    GetDashboardSummaryQuery,
    GetLicenseQuery,
    ListExpiringLicensesQuery,
    ListLicensesQuery,
)
from licenses.domain.events import LicenseCreated, LicenseDeleted, LicenseStatusChanged
from licenses.domain.license import LicenseChanges


def _create_command(**overrides):
    fields = {
        "owner_id": 1,
        "product_name": "Figma",
        "vendor_name": "Figma Inc",
        "category": "Design",
        "billing_cycle": "Monthly",
        "amount": Decimal("15.00"),
        "start_date": date(2025, 1, 1),
        "expiry_date": date(2025, 2, 1),
    }
    fields.update(overrides)
    return CreateLicenseCommand(**fields)


@pytest.mark.asyncio
class TestCreateLicenseHandler:
    """Tests for CreateLicenseHandler."""

    async def test_create_license(self, memory_license_repository, published_events):
        handler = CreateLicenseHandler(memory_license_repository, InMemoryReferenceRepository())

        result = await handler.handle(_create_command(notes="Design team"))

        assert result.product_name == "Figma"
        assert result.status == "Pending"
        assert result.notes == "Design team"
        assert result.expiry is not None
        assert result.id in memory_license_repository.licenses
        assert [type(event) for event in published_events] == [LicenseCreated]

    async def test_expiry_before_start(self, memory_license_repository, published_events):
        handler = CreateLicenseHandler(memory_license_repository, InMemoryReferenceRepository())
        command = _create_command(expiry_date=date(2024, 12, 31))

        with pytest.raises(InvalidLicenseDataError, match="before start date"):
            await handler.handle(command)

        assert memory_license_repository.licenses == {}
        assert published_events == []

    async def test_negative_amount(self, memory_license_repository):
        handler = CreateLicenseHandler(memory_license_repository, InMemoryReferenceRepository())

        with pytest.raises(InvalidLicenseDataError, match="negative"):
            await handler.handle(_create_command(amount=Decimal("-3")))

    async def test_known_references_are_kept(self, memory_license_repository):
        references = InMemoryReferenceRepository()
        handler = CreateLicenseHandler(memory_license_repository, references)
        category, location = references.categories[1], references.locations[0]

        result = await handler.handle(
            _create_command(category_id=category.id, location_id=location.id)
        )

        saved = memory_license_repository.licenses[result.id]
        assert saved.category_id == category.id
        assert saved.location_id == location.id

    async def test_unknown_location(self, memory_license_repository, published_events):
        handler = CreateLicenseHandler(memory_license_repository, InMemoryReferenceRepository())

        with pytest.raises(InvalidLicenseDataError, match="Location .* does not exist"):
            await handler.handle(_create_command(location_id=uuid.uuid4()))

        assert memory_license_repository.licenses == {}
        assert published_events == []

    async def test_unknown_category(self, memory_license_repository):
        handler = CreateLicenseHandler(memory_license_repository, InMemoryReferenceRepository())

        with pytest.raises(InvalidLicenseDataError, match="Category .* does not exist"):
            await handler.handle(_create_command(category_id=uuid.uuid4()))


@pytest.mark.asyncio
class TestGetLicenseHandler:
    async def test_get_with_classification(self, sample_license, today):
        handler = GetLicenseHandler(InMemoryLicenseRepository([sample_license]))

        result = await handler.handle(GetLicenseQuery(sample_license.id, 1, today=today))

        assert result.id == sample_license.id
        assert result.expiry.days_until_expiry == 20
        assert result.expiry.tier == "Warning"
        assert result.expiry.label == "20 days"

    async def test_other_owner_gets_not_found(self, sample_license, today):
        handler = GetLicenseHandler(InMemoryLicenseRepository([sample_license]))

        with pytest.raises(LicenseNotFoundError):
            await handler.handle(GetLicenseQuery(sample_license.id, 2, today=today))


@pytest.mark.asyncio
class TestUpdateLicenseHandler:
    """Tests for UpdateLicenseHandler."""

    async def test_partial_update(self, sample_license, published_events):
        repository = InMemoryLicenseRepository([sample_license])
        handler = UpdateLicenseHandler(repository, InMemoryReferenceRepository())

        result = await handler.handle(
            UpdateLicenseCommand(
                sample_license.id, 1, LicenseChanges(amount=Decimal("120.00"), notes="Renewed")
            )
        )

        assert result.amount == Decimal("120.00")
        assert result.notes == "Renewed"
        assert result.product_name == sample_license.product_name
        assert published_events == []

    async def test_status_edit_publishes_event(self, sample_license, published_events):
        handler = UpdateLicenseHandler(
            InMemoryLicenseRepository([sample_license]), InMemoryReferenceRepository()
        )

        await handler.handle(
            UpdateLicenseCommand(sample_license.id, 1, LicenseChanges(status="Active"))
        )

        assert len(published_events) == 1
        assert isinstance(published_events[0], LicenseStatusChanged)
        assert published_events[0].new_status == "Active"

    async def test_edit_validated_against_merged_license(self, sample_license):
        repository = InMemoryLicenseRepository([sample_license])
        handler = UpdateLicenseHandler(repository, InMemoryReferenceRepository())
        changes = LicenseChanges(expiry_date=sample_license.start_date - timedelta(days=1))

        with pytest.raises(InvalidLicenseDataError):
            await handler.handle(UpdateLicenseCommand(sample_license.id, 1, changes))

        assert repository.licenses[sample_license.id] == sample_license

    async def test_edit_to_unknown_category(self, sample_license):
        repository = InMemoryLicenseRepository([sample_license])
        handler = UpdateLicenseHandler(repository, InMemoryReferenceRepository())
        changes = LicenseChanges(category_id=uuid.uuid4())

        with pytest.raises(InvalidLicenseDataError, match="Category .* does not exist"):
            await handler.handle(UpdateLicenseCommand(sample_license.id, 1, changes))

        assert repository.licenses[sample_license.id] == sample_license

    async def test_update_missing(self, memory_license_repository):
        handler = UpdateLicenseHandler(memory_license_repository, InMemoryReferenceRepository())

        with pytest.raises(LicenseNotFoundError):
            await handler.handle(UpdateLicenseCommand(uuid.uuid4(), 1, LicenseChanges(notes="x")))


@pytest.mark.asyncio
class TestDeleteLicenseHandler:
    async def test_delete(self, sample_license, published_events):
        repository = InMemoryLicenseRepository([sample_license])

        await DeleteLicenseHandler(repository).handle(DeleteLicenseCommand(sample_license.id, 1))

        assert repository.licenses == {}
        assert [type(event) for event in published_events] == [LicenseDeleted]

    async def test_delete_other_owner(self, sample_license):
        repository = InMemoryLicenseRepository([sample_license])

        with pytest.raises(LicenseNotFoundError):
            await DeleteLicenseHandler(repository).handle(
                DeleteLicenseCommand(sample_license.id, 2)
            )

        assert sample_license.id in repository.licenses


@pytest.fixture
def license_book(sample_license, today):
    """Four licenses for owner 1 and one for owner 2."""
    return InMemoryLicenseRepository(
        [
            sample_license,
            replace(
                sample_license,
                id=uuid.uuid4(),
                product_name="Photoshop",
                vendor_name="Adobe",
                category="Design",
                location_name="India",
                expiry_date=today + timedelta(days=2),
            ),
            replace(
                sample_license,
                id=uuid.uuid4(),
                product_name="Zoom",
                expiry_date=today - timedelta(days=5),
            ),
            replace(
                sample_license,
                id=uuid.uuid4(),
                product_name="Jira",
                payment_status=True,
                expiry_date=today + timedelta(days=6),
            ),
            replace(sample_license, id=uuid.uuid4(), owner_id=2, product_name="Notion"),
        ]
    )


@pytest.mark.asyncio
class TestListLicensesHandler:
    """Tests for the list, dashboard, expiring and export handlers."""

    async def test_list_is_owner_scoped_and_ordered(self, license_book, today):
        result = await ListLicensesHandler(license_book).handle(
            ListLicensesQuery(owner_id=1, today=today)
        )

        assert [item.product_name for item in result] == [
            "Zoom",
            "Photoshop",
            "Jira",
            "Microsoft Office",
        ]
        assert result[0].expiry.label == "Expired"
        assert result[1].expiry.tier == "Critical"

    async def test_filters(self, license_book, today):
        handler = ListLicensesHandler(license_book)

        by_branch = await handler.handle(ListLicensesQuery(owner_id=1, branch="India", today=today))
        upcoming = await handler.handle(
            ListLicensesQuery(owner_id=1, renewal="upcoming", today=today)
        )
        expired = await handler.handle(
            ListLicensesQuery(owner_id=1, renewal="expired", today=today)
        )

        assert [item.product_name for item in by_branch] == ["Photoshop"]
        assert [item.product_name for item in upcoming] == ["Photoshop", "Microsoft Office"]
        assert [item.product_name for item in expired] == ["Zoom"]

    async def test_dashboard(self, license_book, today):
        summary = await GetDashboardSummaryHandler(license_book).handle(
            GetDashboardSummaryQuery(owner_id=1, today=today)
        )

        assert summary.total_licenses == 4
        assert summary.upcoming_renewals == 2
        assert summary.expired_licenses == 1
        assert summary.total_value == Decimal("396.00")

    async def test_expiring_within_alert_window(self, license_book, today):
        result = await ListExpiringLicensesHandler(license_book).handle(
            ListExpiringLicensesQuery(owner_id=1, today=today)
        )

        assert [(item.product_name, item.expiry.tier) for item in result] == [
            ("Photoshop", "Critical"),
            ("Jira", "Warning"),
        ]

    async def test_export_uses_filters(self, license_book, today):
        export = await ExportLicensesHandler(license_book).handle(
            ExportLicensesQuery(owner_id=1, category="Design", today=today)
        )

        assert export.filename == "licenses_2025-01-15.csv"
        lines = export.content.split("\n")
        assert len(lines) == 2
        assert lines[1].startswith('"Photoshop","Adobe","Design","India"')
