"""
Credential records for the Hospitable API Client
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


@dataclass(frozen=True)
class Credentials:
    """Bearer credentials; token values are kept out of repr output"""
    token: str = field(repr=False)
    token_type: str = "Bearer"
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    expires_at: Optional[datetime] = None
    refresh_token: Optional[str] = field(default=None, repr=False)


@dataclass
class AuthState:
    """Authentication state held by the credential store"""
    credentials: Optional[Credentials] = None
    authenticated: bool = False
    last_validated: Optional[datetime] = None
    validation_attempts: int = 0
