"""
License queries.

Queries carry an optional reference date; handlers use the current
local date when it is not given.
"""
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class GetLicenseQuery:
    """Query for one of the caller's licenses."""

    license_id: uuid.UUID
    owner_id: int
    today: Optional[date] = None


@dataclass
class ListLicensesQuery:
    """Query for the caller's licenses, filtered."""

    owner_id: int
    search: Optional[str] = None
    category: Optional[str] = None
    branch: Optional[str] = None
    renewal: Optional[str] = None
    today: Optional[date] = None


@dataclass
class ExportLicensesQuery(ListLicensesQuery):
    """Query for a CSV export of the caller's licenses, filtered like the list."""


@dataclass
class GetDashboardSummaryQuery:
    """Query for the caller's dashboard counts."""

    owner_id: int
    today: Optional[date] = None


@dataclass
class ListExpiringLicensesQuery:
    """Query for the caller's licenses expiring within the alert window."""

    owner_id: int
    today: Optional[date] = None


@dataclass
class ListPaymentsQuery:
    """Query for the payment history of a license."""

    license_id: uuid.UUID
    owner_id: int
