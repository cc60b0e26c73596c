"""
IssueAccessTokenCommand.

Command to exchange credentials for a new access token.
"""
from dataclasses import dataclass


@dataclass
class IssueAccessTokenCommand:
    """Command to issue an access token."""

    email: str
    password: str
