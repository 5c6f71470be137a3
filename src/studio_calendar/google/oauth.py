"""Google OAuth credential holder using Authlib.

This module provides OAuth 2.0 authentication for the Calendar API with:
- Authorization URL generation (offline access, forced consent)
- Authorization code exchange
- Google API service creation with refreshable credentials

Tokens are held in memory only. Persisting the refresh token (for example in
GOOGLE_REFRESH_TOKEN) is left to the caller.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from authlib.integrations.requests_client import OAuth2Session
from authlib.oauth2.rfc6749.parameters import prepare_grant_uri
from google.oauth2.credentials import Credentials as GoogleCredentials
from googleapiclient.discovery import build

from studio_calendar.config import DEFAULT_REDIRECT_URI, Settings
from studio_calendar.google.exceptions import CredentialsNotFoundError, TokenError

logger = logging.getLogger(__name__)


# Calendar OAuth scopes
SCOPES = {
    "calendar": "https://www.googleapis.com/auth/calendar",
    "calendar_events": "https://www.googleapis.com/auth/calendar.events",
    "calendar_readonly": "https://www.googleapis.com/auth/calendar.readonly",
}

CALENDAR_SCOPES = ["calendar", "calendar_events"]


class GoogleOAuth:
    """Google OAuth credential holder.

    Owns the client configuration and the active token set. One instance is
    shared by everything that talks to the API on behalf of the same user.

    Example:
        >>> auth = GoogleOAuth(client_id="...", client_secret="...")
        >>> if not auth.is_authorized():
        ...     print(f"Visit: {auth.get_authorization_url()}")
        ...     auth.fetch_token(input("Paste code: "))
        >>> calendar_service = auth.build_service("calendar", "v3")
    """

    AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/auth"
    TOKEN_URL = "https://oauth2.googleapis.com/token"

    def __init__(
        self,
        client_id: str | None,
        client_secret: str | None,
        redirect_uri: str = DEFAULT_REDIRECT_URI,
        refresh_token: str | None = None,
        token: dict[str, Any] | None = None,
        scopes: list[str] | None = None,
    ):
        """Initialize Google OAuth.

        Args:
            client_id: OAuth client ID.
            client_secret: OAuth client secret.
            redirect_uri: Redirect URI registered for the client.
            refresh_token: Stored refresh token. Ignored when `token` is given.
            token: Full token set to start with.
            scopes: Scope names (e.g., ["calendar"]) or full URLs.
                   Defaults to calendar read/write plus event write.

        Raises:
            CredentialsNotFoundError: If client ID or secret is missing.
        """
        missing = [
            name
            for name, value in (("client_id", client_id), ("client_secret", client_secret))
            if not value
        ]
        if missing:
            raise CredentialsNotFoundError(missing)

        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.required_scopes = self._resolve_scopes(scopes or CALENDAR_SCOPES)

        if token is None and refresh_token:
            token = {"refresh_token": refresh_token, "token_type": "Bearer"}

        self.session = OAuth2Session(
            client_id=self.client_id,
            client_secret=self.client_secret,
            scope=" ".join(self.required_scopes),
            redirect_uri=self.redirect_uri,
            token=token,
            token_endpoint=self.TOKEN_URL,
            token_endpoint_auth_method="client_secret_post",
        )

        # Bumped whenever the token set is replaced
        self.revision = 0
        self.last_exchange: datetime | None = None

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> GoogleOAuth:
        """Create a credential holder from configuration."""
        settings = settings or Settings.from_env()
        return cls(
            client_id=settings.client_id,
            client_secret=settings.client_secret,
            redirect_uri=settings.redirect_uri,
            refresh_token=settings.refresh_token,
        )

    def _resolve_scopes(self, scopes: list[str]) -> list[str]:
        """Resolve scope names to full URLs."""
        resolved = []
        for scope in scopes:
            if scope.startswith("https://"):
                resolved.append(scope)
            elif scope in SCOPES:
                resolved.append(SCOPES[scope])
            else:
                raise ValueError(
                    f"Unknown scope: {scope}. Use full URL or one of: {list(SCOPES.keys())}"
                )
        return resolved

    @property
    def token(self) -> dict[str, Any] | None:
        """The active token set, if any."""
        return self.session.token

    def is_authorized(self) -> bool:
        """Check whether an access or refresh token is present."""
        token = self.session.token
        if not token:
            return False
        return bool(token.get("access_token") or token.get("refresh_token"))

    def get_authorization_url(self) -> str:
        """Build the consent URL.

        No `state` parameter is added, so the URL depends only on the client
        configuration.

        Returns:
            Authorization URL for the user to visit.
        """
        return prepare_grant_uri(
            self.AUTHORIZE_URL,
            self.client_id,
            "code",
            redirect_uri=self.redirect_uri,
            scope=" ".join(self.required_scopes),
            access_type="offline",
            prompt="consent",
        )

    def fetch_token(self, code: str) -> dict[str, Any]:
        """Exchange an authorization code and make the result active.

        Args:
            code: The `code` query parameter from the OAuth callback.

        Returns:
            The fetched OAuth token dict.

        Raises:
            OAuthError: If Google rejects the code.
        """
        token = self.session.fetch_token(
            self.TOKEN_URL,
            grant_type="authorization_code",
            code=code,
        )
        self.revision += 1
        self.last_exchange = datetime.now(timezone.utc)

        logger.info(f"Token exchanged with scopes: {token.get('scope', '')}")
        return token

    def set_credentials(self, tokens: dict[str, Any]) -> None:
        """Replace the active token set."""
        self.session.token = tokens
        self.revision += 1

    def get_credentials(self) -> GoogleCredentials:
        """Get Google Credentials object for API client libraries.

        The returned credentials refresh themselves on the first request when
        the access token is missing or expired. Nothing is checked here; an
        unusable token set fails on the remote call.

        Returns:
            Google Credentials object with current token.
        """
        token = self.session.token or {}

        expiry = None
        expires_at = token.get("expires_at")
        if expires_at:
            # google-auth compares against naive UTC
            expiry = datetime.fromtimestamp(expires_at, tz=timezone.utc).replace(tzinfo=None)

        return GoogleCredentials(
            token=token.get("access_token"),
            refresh_token=token.get("refresh_token"),
            token_uri=self.TOKEN_URL,
            client_id=self.client_id,
            client_secret=self.client_secret,
            scopes=self.required_scopes,
            expiry=expiry,
        )

    def build_service(self, service_name: str = "calendar", version: str = "v3"):
        """Build a Google API service with current credentials.

        Args:
            service_name: Name of the service.
            version: API version.

        Returns:
            Google API service object.
        """
        creds = self.get_credentials()
        return build(service_name, version, credentials=creds, cache_discovery=False)

    def get_token_info(self) -> dict[str, Any]:
        """Get information about the current token.

        Returns:
            Dictionary with token status, scopes, expiry, etc.

        Raises:
            TokenError: If the token set has neither access nor refresh token.
        """
        token = self.session.token
        if not token:
            return {"status": "no_token"}

        if not self.is_authorized():
            raise TokenError("Token set has neither access_token nor refresh_token")

        expires_at = token.get("expires_at", 0)
        if expires_at:
            expires_in = expires_at - datetime.now(timezone.utc).timestamp()
            expires_str = str(timedelta(seconds=max(0, int(expires_in))))
            is_expired = expires_in <= 0
        else:
            expires_str = "unknown"
            is_expired = not token.get("access_token")

        return {
            "status": "valid" if not is_expired else "expired",
            "scopes": token.get("scope", "").split(),
            "expires_in": expires_str,
            "has_access_token": bool(token.get("access_token")),
            "has_refresh_token": bool(token.get("refresh_token")),
            "last_exchange": self.last_exchange.isoformat() if self.last_exchange else None,
        }
