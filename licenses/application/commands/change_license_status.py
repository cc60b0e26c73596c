"""
ChangeLicenseStatusCommand.

Command to set a license status, with its payment side effects.
"""
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class ChangeLicenseStatusCommand:
    """Command to change a license status."""

    license_id: uuid.UUID
    owner_id: int
    status: str
    today: Optional[date] = None
