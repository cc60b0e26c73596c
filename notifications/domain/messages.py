"""
Expiry reminder email content.
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional

from django.utils.html import escape

URGENT_NOTE_DAYS = 3
WEEK_NOTE_DAYS = 7


@dataclass(frozen=True)
class ExpiryEmail:
    """Subject and HTML body of one reminder."""

    subject: str
    html: str


def _closing_note(days_until_expiry: int) -> str:
    if days_until_expiry <= URGENT_NOTE_DAYS:
        return (
            '<p style="color: red; font-weight: bold;">'
            "URGENT: This license expires very soon!</p>"
        )
    if days_until_expiry <= WEEK_NOTE_DAYS:
        return (
            '<p style="color: orange; font-weight: bold;">'
            "This license expires within a week!</p>"
        )
    return "<p>Please plan for renewal to avoid service interruption.</p>"


def build_expiry_email(
    product_name: str,
    vendor_name: str,
    expiry_date: date,
    days_until_expiry: int,
    urgency: Optional[str],
) -> ExpiryEmail:
    """
    Render the reminder for one license.

    Args:
        product_name: License product name
        vendor_name: License vendor name
        expiry_date: License expiry date
        days_until_expiry: Days remaining
        urgency: Notification tier

    Returns:
        ExpiryEmail
    """
    subject = f"License Expiry Alert: {product_name} - {days_until_expiry} days remaining"
    html = (
        "<h2>License Expiry Notification</h2>"
        f"<p><strong>Urgency:</strong> {escape(urgency or '')}</p>"
        f"<p><strong>Product:</strong> {escape(product_name)}</p>"
        f"<p><strong>Vendor:</strong> {escape(vendor_name)}</p>"
        f"<p><strong>Expiry Date:</strong> {expiry_date.isoformat()}</p>"
        f"<p><strong>Days Until Expiry:</strong> {days_until_expiry}</p>"
        f"{_closing_note(days_until_expiry)}"
        "<p>Please take necessary action to renew this license before it expires.</p>"
    )
    return ExpiryEmail(subject=subject, html=html)
