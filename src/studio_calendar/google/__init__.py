"""Google OAuth credential handling."""

from studio_calendar.google.exceptions import (
    CredentialsNotFoundError,
    GoogleAuthError,
    TokenError,
)
from studio_calendar.google.oauth import CALENDAR_SCOPES, SCOPES, GoogleOAuth

__all__ = [
    "GoogleOAuth",
    "SCOPES",
    "CALENDAR_SCOPES",
    "GoogleAuthError",
    "CredentialsNotFoundError",
    "TokenError",
]
