"""
CSV import of licenses.

Parsing is deliberately simple: lines are split on newlines and fields
on commas, with one pair of surrounding double quotes stripped. Quoted
values containing commas are not supported and shift the columns.
Validation is all-or-nothing: every row is checked and one error makes
the whole batch fail. Rows are held to the same rules as a license
created by hand, plus the column limits of the License table.
"""
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Optional, Sequence, Tuple

from django.utils.dateparse import parse_date

from catalog.domain.reference import Category, Location
from core.domain.exceptions import CSVFormatError, CSVValidationError
from core.domain.value_objects import BillingCycle
from licenses.domain.license import License

logger = logging.getLogger(__name__)

IMPORT_COLUMNS = (
    "product_name",
    "vendor_name",
    "category",
    "amount",
    "billing_cycle",
    "status",
    "start_date",
    "expiry_date",
    "last_renewal_date",
    "login_link",
    "password",
    "notes",
    "notification_email",
    "notification_phone",
)

# Export header names (normalised) that map onto import columns
HEADER_ALIASES = {
    "product": "product_name",
    "vendor": "vendor_name",
    "branch_name": "location",
    "branch": "location",
    "renewal_date": "last_renewal_date",
}

OPTIONAL_TEXT_COLUMNS = (
    "login_link",
    "password",
    "notes",
    "notification_email",
    "notification_phone",
)

# Same bounds as the License.amount column (12 digits, 2 decimal places)
CENTS = Decimal("0.01")
MAX_AMOUNT = Decimal("9999999999.99")

# Column length limits of the License table
TEXT_LIMITS = (
    ("product_name", "Product name", 255),
    ("vendor_name", "Vendor name", 255),
    ("category", "Category", 100),
    ("status", "Status", 50),
    ("notification_email", "Notification email", 255),
    ("notification_phone", "Notification phone", 50),
)

TEMPLATE_FILENAME = "license_import_template.csv"

TEMPLATE_CSV = "\n".join(
    [
        ",".join(IMPORT_COLUMNS),
        "Microsoft Office,Microsoft,Software,99.00,Annual,Active,2024-01-01,2024-12-31,"
        "2024-01-01,https://office.com,password123,Office productivity suite,"
        "user@company.com,+1234567890",
        "Adobe Creative Suite,Adobe,Design,299.00,Monthly,Active,2024-01-01,2024-02-01,,"
        "https://adobe.com,password456,Design software,design@company.com,+1234567891",
    ]
)


def decode_csv(payload: bytes) -> str:
    """
    Decode an uploaded CSV payload as UTF-8 (a byte order mark is allowed).

    Raises:
        CSVFormatError: If the payload is not valid UTF-8
    """
    try:
        return payload.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise CSVFormatError(f"CSV file must be UTF-8 encoded: {e.reason}") from e


def _strip_field(value: str) -> str:
    value = value.strip()
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


def normalize_header(cell: str) -> str:
    """Lower-case, underscore and alias a header cell."""
    name = _strip_field(cell).strip().lower().replace(" ", "_")
    return HEADER_ALIASES.get(name, name)


def parse_csv(text: str) -> List[Dict[str, str]]:
    """
    Split CSV text into rows keyed by normalised header.

    Missing trailing fields read as empty strings.

    Args:
        text: Decoded CSV text

    Returns:
        One dict per data row
    """
    text = text.strip()
    if not text:
        return []

    lines = text.split("\n")
    headers = [normalize_header(cell) for cell in lines[0].split(",")]

    rows = []
    for line in lines[1:]:
        values = [_strip_field(value) for value in line.split(",")]
        rows.append(
            {header: values[i] if i < len(values) else "" for i, header in enumerate(headers)}
        )
    return rows


def _parse_iso_date(value: str) -> Optional[date]:
    try:
        return parse_date(value)
    except ValueError:
        return None


def _parse_amount(value: str) -> Optional[Decimal]:
    try:
        amount = Decimal(value)
        if not amount.is_finite() or amount < 0:
            return None
        amount = amount.quantize(CENTS)
    except InvalidOperation:
        return None
    if amount > MAX_AMOUNT:
        return None
    return amount


@dataclass(frozen=True)
class ImportRow:
    """A validated CSV row with parsed values."""

    product_name: str
    vendor_name: str
    category: str
    amount: Decimal
    billing_cycle: str
    status: str
    start_date: date
    expiry_date: date
    last_renewal_date: Optional[date]
    optional: Dict[str, Optional[str]]


def validate_row(row: Dict[str, str], index: int) -> Tuple[List[str], Optional[ImportRow]]:
    """
    Validate one data row.

    Args:
        row: Row values keyed by column
        index: Zero-based data row index

    Returns:
        (errors, parsed row); the parsed row is None when there are errors
    """
    line = index + 2
    errors = []

    def value(column: str) -> str:
        return row.get(column, "").strip()

    for column, label in (
        ("product_name", "Product name"),
        ("vendor_name", "Vendor name"),
        ("category", "Category"),
    ):
        if not value(column):
            errors.append(f"Row {line}: {label} is required")

    amount = _parse_amount(value("amount")) if value("amount") else None
    if amount is None:
        errors.append(f"Row {line}: Valid amount is required")

    billing_cycle = value("billing_cycle")
    if not billing_cycle:
        errors.append(f"Row {line}: Billing cycle is required")
    elif billing_cycle not in BillingCycle.values():
        errors.append(
            f"Row {line}: Billing cycle must be one of: {', '.join(BillingCycle.values())}"
        )

    if not value("status"):
        errors.append(f"Row {line}: Status is required")

    dates = {}
    for column, label in (("start_date", "start date"), ("expiry_date", "expiry date")):
        if not value(column):
            errors.append(f"Row {line}: {label.capitalize()} is required")
            continue
        dates[column] = _parse_iso_date(value(column))
        if dates[column] is None:
            errors.append(f"Row {line}: Invalid {label} format")

    last_renewal_date = None
    if value("last_renewal_date"):
        last_renewal_date = _parse_iso_date(value("last_renewal_date"))
        if last_renewal_date is None:
            errors.append(f"Row {line}: Invalid last renewal date format")

    if dates.get("start_date") and dates.get("expiry_date"):
        if dates["expiry_date"] < dates["start_date"]:
            errors.append(f"Row {line}: Expiry date cannot be before start date")

    for column, label, limit in TEXT_LIMITS:
        if len(value(column)) > limit:
            errors.append(f"Row {line}: {label} must be at most {limit} characters")

    if errors:
        return errors, None

    return [], ImportRow(
        product_name=value("product_name"),
        vendor_name=value("vendor_name"),
        category=value("category"),
        amount=amount,
        billing_cycle=billing_cycle,
        status=value("status"),
        start_date=dates["start_date"],
        expiry_date=dates["expiry_date"],
        last_renewal_date=last_renewal_date,
        optional={column: value(column) or None for column in OPTIONAL_TEXT_COLUMNS},
    )


class LicenseCSVImporter:
    """
    Turns an uploaded CSV payload into License entities.

    Categories are matched by name ignoring case; every imported license
    is assigned the first location in name order.
    """

    def __init__(self, categories: Sequence[Category], locations: Sequence[Location]):
        self.categories = list(categories)
        self.locations = sorted(locations, key=lambda location: location.name)

    def build(self, payload: bytes, owner_id: int) -> List[License]:
        """
        Validate a payload and map it to licenses.

        Args:
            payload: Raw uploaded bytes
            owner_id: Importing user

        Returns:
            Licenses to insert (empty for a header-only file)

        Raises:
            CSVFormatError: If the payload cannot be decoded
            CSVValidationError: With every row error, if any row is invalid
        """
        rows = parse_csv(decode_csv(payload))

        errors: List[str] = []
        parsed: List[ImportRow] = []
        for index, row in enumerate(rows):
            row_errors, import_row = validate_row(row, index)
            errors.extend(row_errors)
            if import_row:
                parsed.append(import_row)

        if errors:
            logger.info(
                "CSV import rejected",
                extra={"owner_id": owner_id, "rows": len(rows), "errors": len(errors)},
            )
            raise CSVValidationError(errors)

        return [self._to_license(row, owner_id) for row in parsed]

    def count_rows(self, payload: bytes) -> int:
        """Number of data rows in a decodable payload."""
        return len(parse_csv(decode_csv(payload)))

    def _to_license(self, row: ImportRow, owner_id: int) -> License:
        category = next((item for item in self.categories if item.matches(row.category)), None)
        location = self.locations[0] if self.locations else None
        return License.create(
            owner_id=owner_id,
            product_name=row.product_name,
            vendor_name=row.vendor_name,
            category=row.category,
            billing_cycle=row.billing_cycle,
            amount=row.amount,
            start_date=row.start_date,
            expiry_date=row.expiry_date,
            status=row.status,
            category_id=category.id if category else None,
            location_id=location.id if location else None,
            location_name=location.name if location else None,
            last_renewal_date=row.last_renewal_date,
            **row.optional,
        )
