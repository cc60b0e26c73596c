"""
Expiry boundary sets built from Django settings.
"""
from django.conf import settings

from licenses.domain.expiry import (
    ALERT_BEYOND,
    ALERT_TIERS,
    DISPLAY_BEYOND,
    DISPLAY_TIERS,
    NOTIFICATION_BEYOND,
    NOTIFICATION_TIERS,
    ExpiryBoundaries,
)


def display_boundaries() -> ExpiryBoundaries:
    """Boundaries for license lists and the dashboard (EXPIRY_DISPLAY_BOUNDARIES)."""
    return ExpiryBoundaries.from_days(
        settings.EXPIRY_DISPLAY_BOUNDARIES, DISPLAY_TIERS, DISPLAY_BEYOND
    )


def alert_boundaries() -> ExpiryBoundaries:
    """Boundaries for the expiring-soon list (EXPIRY_ALERT_BOUNDARIES)."""
    return ExpiryBoundaries.from_days(settings.EXPIRY_ALERT_BOUNDARIES, ALERT_TIERS, ALERT_BEYOND)


def notification_boundaries() -> ExpiryBoundaries:
    """Boundaries for reminder emails (EXPIRY_NOTIFICATION_BOUNDARIES)."""
    return ExpiryBoundaries.from_days(
        settings.EXPIRY_NOTIFICATION_BOUNDARIES, NOTIFICATION_TIERS, NOTIFICATION_BEYOND
    )
