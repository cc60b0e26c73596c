"""
Unit tests for License domain services.
"""

from dataclasses import replace
from datetime import timedelta
from decimal import Decimal

import pytest

from core.domain.exceptions import InvalidLicenseDataError
from licenses.domain.services import DashboardSummary, LicenseFilter, LicenseValidator


class TestLicenseValidator:
    """Tests for LicenseValidator service."""

    def test_validate_valid_license(self, sample_license):
        """Test validating a valid license."""
        LicenseValidator.validate(sample_license)

    def test_expiry_before_start(self, sample_license):
        invalid = replace(
            sample_license, expiry_date=sample_license.start_date - timedelta(days=1)
        )
        with pytest.raises(InvalidLicenseDataError, match="before start date"):
            LicenseValidator.validate(invalid)

    def test_expiry_equal_to_start_is_allowed(self, sample_license):
        LicenseValidator.validate(replace(sample_license, expiry_date=sample_license.start_date))

    @pytest.mark.parametrize(
        "field,message",
        [
            ("product_name", "Product name"),
            ("vendor_name", "Vendor name"),
            ("category", "Category"),
            ("status", "Status"),
        ],
    )
    def test_required_text_fields(self, sample_license, field, message):
        with pytest.raises(InvalidLicenseDataError, match=message):
            LicenseValidator.validate(replace(sample_license, **{field: "  "}))


class TestLicenseFilter:
    """Tests for LicenseFilter."""

    def test_empty_filter_matches_everything(self, sample_license, today):
        assert LicenseFilter().matches(sample_license, today, 30)

    @pytest.mark.parametrize("term", ["office", "MICRO", "software", "usa", "annual", "99"])
    def test_search_over_text_fields(self, sample_license, today, term):
        assert LicenseFilter(search=term).matches(sample_license, today, 30)

    def test_search_by_date(self, sample_license, today):
        term = sample_license.expiry_date.isoformat()
        assert LicenseFilter(search=term).matches(sample_license, today, 30)

    def test_search_by_payment_word(self, sample_license, today):
        assert LicenseFilter(search="unpaid").matches(sample_license, today, 30)

    def test_search_no_match(self, sample_license, today):
        assert not LicenseFilter(search="adobe").matches(sample_license, today, 30)

    def test_category_is_exact(self, sample_license, today):
        assert LicenseFilter(category="Software").matches(sample_license, today, 30)
        assert not LicenseFilter(category="Soft").matches(sample_license, today, 30)

    def test_branch_matches_location_name(self, sample_license, today):
        assert LicenseFilter(branch="USA").matches(sample_license, today, 30)
        assert not LicenseFilter(branch="India").matches(sample_license, today, 30)

    def test_upcoming_excludes_paid(self, sample_license, today):
        upcoming = LicenseFilter(renewal="upcoming")
        assert upcoming.matches(sample_license, today, 30)
        assert not upcoming.matches(replace(sample_license, payment_status=True), today, 30)

    def test_upcoming_excludes_beyond_window(self, sample_license, today):
        later = replace(sample_license, expiry_date=today + timedelta(days=31))
        assert not LicenseFilter(renewal="upcoming").matches(later, today, 30)

    def test_expired(self, sample_license, today):
        expired = replace(sample_license, expiry_date=today - timedelta(days=1))
        assert LicenseFilter(renewal="expired").matches(expired, today, 30)
        assert not LicenseFilter(renewal="expired").matches(sample_license, today, 30)

    def test_apply_keeps_order(self, sample_license, today):
        second = replace(sample_license, product_name="Office 365")
        assert LicenseFilter(search="office").apply([second, sample_license], today, 30) == [
            second,
            sample_license,
        ]


class TestDashboardSummary:
    """Tests for DashboardSummary."""

    def test_compute(self, sample_license, today):
        licenses = [
            sample_license,
            replace(sample_license, payment_status=True, amount=Decimal("50.00")),
            replace(sample_license, expiry_date=today - timedelta(days=3), amount=Decimal("1")),
            replace(sample_license, expiry_date=today + timedelta(days=90)),
        ]
        summary = DashboardSummary.compute(licenses, today, 30)

        assert summary.total_licenses == 4
        assert summary.upcoming_renewals == 1
        assert summary.expired_licenses == 1
        assert summary.total_value == Decimal("249.00")

    def test_compute_empty(self, today):
        summary = DashboardSummary.compute([], today, 30)
        assert summary.total_licenses == 0
        assert summary.total_value == Decimal("0")
