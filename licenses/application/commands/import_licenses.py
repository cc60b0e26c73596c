"""
ImportLicensesCommand.
"""
from dataclasses import dataclass


@dataclass
class ImportLicensesCommand:
    """Command to import licenses from an uploaded CSV payload."""

    owner_id: int
    payload: bytes
