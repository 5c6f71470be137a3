"""Google authentication exceptions.

These cover local configuration problems only. Errors returned by Google
(authlib ``OAuth2Error``, googleapiclient ``HttpError``) are re-raised as-is.
"""


class GoogleAuthError(Exception):
    """Base exception for Google authentication errors."""

    pass


class CredentialsNotFoundError(GoogleAuthError):
    """Raised when the OAuth client ID or secret is not configured."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(
            f"OAuth client credentials not configured: {', '.join(missing)}. "
            "Set them in the environment or .env file."
        )


class TokenError(GoogleAuthError):
    """Raised when there's an issue with the OAuth token."""

    pass
