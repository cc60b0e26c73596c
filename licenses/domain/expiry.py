"""
Expiry classification.

Maps an expiry date to days remaining, an urgency tier and a display
label, using an ordered set of day boundaries.
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence, Tuple

EXPIRED = "Expired"

# Tier names per boundary set, most urgent first
DISPLAY_TIERS = ("Critical", "Warning")
DISPLAY_BEYOND = "Active"

NOTIFICATION_TIERS = ("URGENT", "HIGH", "MEDIUM", "LOW")
NOTIFICATION_BEYOND = None

ALERT_TIERS = ("Critical", "Warning")
ALERT_BEYOND = "Notice"


@dataclass(frozen=True)
class ExpiryBoundaries:
    """
    Ordered (days, tier) thresholds.

    A license whose days until expiry is at most a threshold's days
    gets that threshold's tier; the first matching threshold wins.
    """

    thresholds: Tuple[Tuple[int, str], ...]
    beyond: Optional[str] = None
    expired: str = EXPIRED

    def __post_init__(self):
        """Validate that thresholds are non-negative and strictly increasing."""
        if not self.thresholds:
            raise ValueError("At least one expiry boundary is required")
        previous = -1
        for days, _tier in self.thresholds:
            if days < 0:
                raise ValueError(f"Expiry boundary cannot be negative: {days}")
            if days <= previous:
                raise ValueError("Expiry boundaries must be strictly increasing")
            previous = days

    @classmethod
    def from_days(
        cls, days: Sequence[int], tiers: Sequence[str], beyond: Optional[str] = None
    ) -> "ExpiryBoundaries":
        """
        Pair configured day values with tier names.

        Args:
            days: Boundary days, ascending
            tiers: Tier names, most urgent first
            beyond: Tier for anything past the last boundary

        Returns:
            ExpiryBoundaries instance
        """
        if len(days) != len(tiers):
            raise ValueError(f"Expected {len(tiers)} expiry boundaries, got {len(days)}")
        return cls(thresholds=tuple(zip(days, tiers)), beyond=beyond)

    @property
    def horizon(self) -> int:
        """Days covered by the last threshold."""
        return self.thresholds[-1][0]


@dataclass(frozen=True)
class ExpiryClassification:
    """Result of classifying one expiry date."""

    days_until_expiry: int
    tier: Optional[str]
    label: str

    @property
    def is_expired(self) -> bool:
        return self.days_until_expiry < 0


def classify(expiry_date: date, today: date, boundaries: ExpiryBoundaries) -> ExpiryClassification:
    """
    Classify an expiry date relative to today.

    Args:
        expiry_date: License expiry date
        today: Reference date
        boundaries: Boundary set to classify against

    Returns:
        ExpiryClassification
    """
    days = (expiry_date - today).days
    if days < 0:
        return ExpiryClassification(days_until_expiry=days, tier=boundaries.expired, label=EXPIRED)

    tier = boundaries.beyond
    for threshold, threshold_tier in boundaries.thresholds:
        if days <= threshold:
            tier = threshold_tier
            break
    return ExpiryClassification(days_until_expiry=days, tier=tier, label=f"{days} days")


DEFAULT_DISPLAY_BOUNDARIES = ExpiryBoundaries.from_days((7, 30), DISPLAY_TIERS, DISPLAY_BEYOND)
DEFAULT_NOTIFICATION_BOUNDARIES = ExpiryBoundaries.from_days(
    (3, 7, 15, 30), NOTIFICATION_TIERS, NOTIFICATION_BEYOND
)
DEFAULT_ALERT_BOUNDARIES = ExpiryBoundaries.from_days((3, 7), ALERT_TIERS, ALERT_BEYOND)
