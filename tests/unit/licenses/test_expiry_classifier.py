"""
Unit tests for expiry classification.
"""
from datetime import date, timedelta

import pytest

from licenses.domain.expiry import (
    DEFAULT_ALERT_BOUNDARIES,
    DEFAULT_DISPLAY_BOUNDARIES,
    DEFAULT_NOTIFICATION_BOUNDARIES,
    NOTIFICATION_TIERS,
    ExpiryBoundaries,
    classify,
)

TODAY = date(2025, 1, 15)


def _in(days):
    return TODAY + timedelta(days=days)


class TestDisplayBoundaries:
    """Table and dashboard tiers: 7 Critical, 30 Warning, beyond Active."""

    @pytest.mark.parametrize(
        "days,tier",
        [(-1, "Expired"), (0, "Critical"), (7, "Critical"), (8, "Warning"), (30, "Warning")],
    )
    def test_tiers(self, days, tier):
        assert classify(_in(days), TODAY, DEFAULT_DISPLAY_BOUNDARIES).tier == tier

    def test_beyond_last_boundary(self):
        assert classify(_in(31), TODAY, DEFAULT_DISPLAY_BOUNDARIES).tier == "Active"


class TestNotificationBoundaries:
    """Reminder email tiers: 3 URGENT, 7 HIGH, 15 MEDIUM, 30 LOW."""

    @pytest.mark.parametrize(
        "days,tier",
        [(2, "URGENT"), (3, "URGENT"), (4, "HIGH"), (7, "HIGH"), (15, "MEDIUM"), (30, "LOW")],
    )
    def test_tiers(self, days, tier):
        assert classify(_in(days), TODAY, DEFAULT_NOTIFICATION_BOUNDARIES).tier == tier

    def test_beyond_horizon_has_no_tier(self):
        assert classify(_in(31), TODAY, DEFAULT_NOTIFICATION_BOUNDARIES).tier is None

    def test_horizon(self):
        assert DEFAULT_NOTIFICATION_BOUNDARIES.horizon == 30


class TestAlertBoundaries:
    def test_tiers(self):
        assert classify(_in(3), TODAY, DEFAULT_ALERT_BOUNDARIES).tier == "Critical"
        assert classify(_in(5), TODAY, DEFAULT_ALERT_BOUNDARIES).tier == "Warning"
        assert classify(_in(9), TODAY, DEFAULT_ALERT_BOUNDARIES).tier == "Notice"


class TestClassification:
    def test_label_counts_days(self):
        result = classify(_in(12), TODAY, DEFAULT_DISPLAY_BOUNDARIES)
        assert result.days_until_expiry == 12
        assert result.label == "12 days"
        assert not result.is_expired

    def test_expired_label(self):
        result = classify(_in(-5), TODAY, DEFAULT_DISPLAY_BOUNDARIES)
        assert result.days_until_expiry == -5
        assert result.label == "Expired"
        assert result.is_expired

    def test_expiring_today_is_not_expired(self):
        result = classify(TODAY, TODAY, DEFAULT_DISPLAY_BOUNDARIES)
        assert result.days_until_expiry == 0
        assert result.label == "0 days"


class TestExpiryBoundaries:
    """Tests for boundary set construction."""

    def test_from_days_pairs_tiers(self):
        boundaries = ExpiryBoundaries.from_days((1, 2, 5, 10), NOTIFICATION_TIERS)
        assert boundaries.thresholds == ((1, "URGENT"), (2, "HIGH"), (5, "MEDIUM"), (10, "LOW"))

    def test_rejects_mismatched_lengths(self):
        with pytest.raises(ValueError, match="Expected 4"):
            ExpiryBoundaries.from_days((3, 7), NOTIFICATION_TIERS)

    def test_rejects_non_increasing(self):
        with pytest.raises(ValueError, match="strictly increasing"):
            ExpiryBoundaries.from_days((30, 7), ("Critical", "Warning"))

    def test_rejects_negative(self):
        with pytest.raises(ValueError, match="negative"):
            ExpiryBoundaries.from_days((-1, 7), ("Critical", "Warning"))

    def test_rejects_empty(self):
        with pytest.raises(ValueError):
            ExpiryBoundaries(thresholds=())
