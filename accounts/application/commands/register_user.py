"""
RegisterUserCommand.

Command to create a new account and return its first access token.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class RegisterUserCommand:
    """Command to register a user with email and password."""

    email: str
    password: str
    full_name: Optional[str] = None
