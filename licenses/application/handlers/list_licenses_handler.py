"""
License list handlers.

Handlers for the filtered list, dashboard summary, expiring-soon alert
list and CSV export. All of them work on the caller's licenses ordered
by expiry date.
"""
from datetime import date
from typing import List

from django.utils import timezone

from licenses.application.dto.license_dto import CSVExportDTO, DashboardSummaryDTO, LicenseDTO
from licenses.application.queries.license_queries import (
    ExportLicensesQuery,
    GetDashboardSummaryQuery,
    ListExpiringLicensesQuery,
    ListLicensesQuery,
)
from licenses.application.services.csv_export import export_filename, export_licenses_csv
from licenses.domain.expiry import (
    DEFAULT_ALERT_BOUNDARIES,
    DEFAULT_DISPLAY_BOUNDARIES,
    ExpiryBoundaries,
    classify,
)
from licenses.domain.license import License
from licenses.domain.services import DashboardSummary, LicenseFilter
from licenses.ports.license_repository import LicenseRepository

DEFAULT_UPCOMING_WINDOW_DAYS = 30
DEFAULT_ALERT_WINDOW_DAYS = 7


class ListLicensesHandler:
    """Handler for ListLicensesQuery."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        boundaries: ExpiryBoundaries = DEFAULT_DISPLAY_BOUNDARIES,
        upcoming_window_days: int = DEFAULT_UPCOMING_WINDOW_DAYS,
    ):
        """Initialize handler with repository and classification settings."""
        self.license_repository = license_repository
        self.boundaries = boundaries
        self.upcoming_window_days = upcoming_window_days

    async def _filtered(self, query: ListLicensesQuery, today: date) -> List[License]:
        licenses = await self.license_repository.find_by_owner(query.owner_id)
        license_filter = LicenseFilter(
            search=query.search,
            category=query.category,
            branch=query.branch,
            renewal=query.renewal,
        )
        return license_filter.apply(licenses, today, self.upcoming_window_days)

    async def handle(self, query: ListLicensesQuery) -> List[LicenseDTO]:
        """
        Handle list licenses query.

        Args:
            query: ListLicensesQuery

        Returns:
            LicenseDTOs with their display classification
        """
        today = query.today or timezone.localdate()
        return [
            LicenseDTO.from_entity(license, classify(license.expiry_date, today, self.boundaries))
            for license in await self._filtered(query, today)
        ]


class ExportLicensesHandler(ListLicensesHandler):
    """Handler for ExportLicensesQuery."""

    async def handle(self, query: ExportLicensesQuery) -> CSVExportDTO:
        """
        Handle export licenses query.

        Returns:
            CSVExportDTO with the dated filename and CSV text
        """
        today = query.today or timezone.localdate()
        licenses = await self._filtered(query, today)
        return CSVExportDTO(filename=export_filename(today), content=export_licenses_csv(licenses))


class GetDashboardSummaryHandler:
    """Handler for GetDashboardSummaryQuery."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        upcoming_window_days: int = DEFAULT_UPCOMING_WINDOW_DAYS,
    ):
        """Initialize handler with repository."""
        self.license_repository = license_repository
        self.upcoming_window_days = upcoming_window_days

    async def handle(self, query: GetDashboardSummaryQuery) -> DashboardSummaryDTO:
        today = query.today or timezone.localdate()
        licenses = await self.license_repository.find_by_owner(query.owner_id)
        summary = DashboardSummary.compute(licenses, today, self.upcoming_window_days)
        return DashboardSummaryDTO(
            total_licenses=summary.total_licenses,
            upcoming_renewals=summary.upcoming_renewals,
            expired_licenses=summary.expired_licenses,
            total_value=summary.total_value,
        )


class ListExpiringLicensesHandler:
    """Handler for ListExpiringLicensesQuery."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        boundaries: ExpiryBoundaries = DEFAULT_ALERT_BOUNDARIES,
        window_days: int = DEFAULT_ALERT_WINDOW_DAYS,
    ):
        """Initialize handler with repository and alert settings."""
        self.license_repository = license_repository
        self.boundaries = boundaries
        self.window_days = window_days

    async def handle(self, query: ListExpiringLicensesQuery) -> List[LicenseDTO]:
        """
        Handle list expiring licenses query.

        Returns:
            Licenses expiring today through the alert window, with alert tiers
        """
        today = query.today or timezone.localdate()
        licenses = await self.license_repository.find_by_owner(query.owner_id)
        expiring = []
        for license in licenses:
            classification = classify(license.expiry_date, today, self.boundaries)
            if 0 <= classification.days_until_expiry <= self.window_days:
                expiring.append(LicenseDTO.from_entity(license, classification))
        return expiring
