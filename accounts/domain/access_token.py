"""
Access token value types.
"""
import hashlib
import secrets
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

TOKEN_PREFIX_LENGTH = 8


def generate_raw_token() -> str:
    """Generate a new opaque bearer token."""
    return secrets.token_urlsafe(32)


def hash_token(raw_token: str) -> str:
    """SHA-256 hex digest used to store and look up tokens."""
    return hashlib.sha256(raw_token.encode()).hexdigest()


@dataclass(frozen=True)
class IssuedToken:
    """A freshly issued token. The raw value is only available here."""

    raw_token: str
    user_id: int
    expires_at: Optional[datetime]

    @property
    def prefix(self) -> str:
        return self.raw_token[:TOKEN_PREFIX_LENGTH]
