"""
CSV export of licenses.

Every field is wrapped in double quotes without escaping, so values
containing commas or quotes do not survive a re-import.
"""
from datetime import date
from typing import Iterable, List

from licenses.domain.license import License

EXPORT_HEADERS = (
    "Product Name",
    "Vendor",
    "Category",
    "Branch Name",
    "Amount",
    "Billing Cycle",
    "Start Date",
    "Expiry Date",
    "Last Renewal Date",
    "Status",
    "Payment Status",
    "Notes",
)


def _export_row(license: License) -> List[str]:
    return [
        license.product_name,
        license.vendor_name,
        license.category,
        license.location_name or "",
        str(license.amount),
        license.billing_cycle,
        license.start_date.isoformat(),
        license.expiry_date.isoformat(),
        license.last_renewal_date.isoformat() if license.last_renewal_date else "",
        license.status or "",
        "Paid" if license.payment_status else "Unpaid",
        license.notes or "",
    ]


def export_licenses_csv(licenses: Iterable[License]) -> str:
    """
    Render licenses as CSV text.

    Args:
        licenses: Licenses in the order they should appear

    Returns:
        CSV text, rows joined by newlines
    """
    rows = [list(EXPORT_HEADERS)] + [_export_row(license) for license in licenses]
    return "\n".join(",".join(f'"{field}"' for field in row) for row in rows)


def export_filename(today: date) -> str:
    """Download filename for an export made on the given date."""
    return f"licenses_{today.isoformat()}.csv"
