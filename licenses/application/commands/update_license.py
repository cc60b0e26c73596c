"""
UpdateLicenseCommand and DeleteLicenseCommand.
"""
import uuid
from dataclasses import dataclass

from licenses.domain.license import LicenseChanges


@dataclass
class UpdateLicenseCommand:
    """Command to edit a license."""

    license_id: uuid.UUID
    owner_id: int
    changes: LicenseChanges


@dataclass
class DeleteLicenseCommand:
    """Command to delete a license and its payment history."""

    license_id: uuid.UUID
    owner_id: int
