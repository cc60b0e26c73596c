"""
RunExpirySweepCommand.
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class RunExpirySweepCommand:
    """Command to run one expiry notification sweep."""

    today: Optional[date] = None
    dry_run: bool = False
